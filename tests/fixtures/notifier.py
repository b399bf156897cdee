import re
from typing import List, NamedTuple, Optional

from libs.result import Error, Result, Return
from src.app.services.notifications import INotificationDispatcher


class SentEmail(NamedTuple):
    to_address: str
    subject: str
    text_body: str
    html_body: str


class RecordingNotifier(INotificationDispatcher):
    """Keeps every email in memory; can be told to fail"""

    def __init__(self):
        self.sent: List[SentEmail] = []
        self.fail = False

    async def send(
        self, to_address: str, subject: str, text_body: str, html_body: str
    ) -> Result[None]:
        if self.fail:
            return Return.err(Error("NOTIFICATION_FAILED", "Email could not be sent"))
        self.sent.append(SentEmail(to_address, subject, text_body, html_body))
        return Return.ok(None)

    def last_token(self, path: str) -> Optional[str]:
        """Token from the newest email linking to .../<path>/<token>"""
        for email in reversed(self.sent):
            match = re.search(rf"/{path}/(\S+)", email.text_body)
            if match:
                return match.group(1)
        return None
