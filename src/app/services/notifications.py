from abc import ABC, abstractmethod

from libs.result import Result


class INotificationDispatcher(ABC):
    """Outbound email interface - application layer"""

    @abstractmethod
    async def send(
        self, to_address: str, subject: str, text_body: str, html_body: str
    ) -> Result[None]:
        """
        Send one email.

        Delivery failures are returned as Error("NOTIFICATION_FAILED", ...),
        never raised.
        """
        pass
