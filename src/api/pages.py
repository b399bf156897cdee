"""HTML pages served to browsers following email links"""

import html
import json

VERIFICATION_SUCCESS_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Account verified</title></head>
<body>
    <h1>Hello, {username}</h1>
    <p>Your account is verified. You can now log in.</p>
</body>
</html>
"""

PASSWORD_RESET_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>Reset password</title></head>
<body>
    <h1>Hello, {username}</h1>
    <form id="reset-form">
        <label for="password">New password</label>
        <input id="password" name="password" type="password" required>
        <button type="submit">Reset Password</button>
    </form>
    <p id="result"></p>
    <script>
        document.getElementById("reset-form").addEventListener("submit", async (event) => {{
            event.preventDefault();
            const response = await fetch({action}, {{
                method: "POST",
                headers: {{"Content-Type": "application/json"}},
                body: JSON.stringify({{
                    token: {token},
                    new_password: document.getElementById("password").value,
                }}),
            }});
            const body = await response.json();
            document.getElementById("result").textContent =
                response.ok ? body.message : body.error.message;
        }});
    </script>
</body>
</html>
"""


def render_verification_success(username: str) -> str:
    return VERIFICATION_SUCCESS_PAGE.format(username=html.escape(username))


def render_password_reset(username: str, token: str, action: str) -> str:
    # json.dumps gives JS string literals; escape "</" so they cannot close the script
    return PASSWORD_RESET_PAGE.format(
        username=html.escape(username),
        token=json.dumps(token).replace("</", "<\\/"),
        action=json.dumps(action).replace("</", "<\\/"),
    )
