"""Email bodies for account notifications, filled with str.format"""

VERIFY_ACCOUNT_SUBJECT = "Verify Account"

VERIFY_ACCOUNT_TEXT = """Hello {username},

Please verify your account by opening the link below:
{link}
"""

VERIFY_ACCOUNT_HTML = """
<div>
    <h1>Hello, {username}</h1>
    <p>Please click the following link to verify your account</p>
    <a href="{link}">Verify Now</a>
</div>
"""

RESET_PASSWORD_SUBJECT = "Reset Password"

RESET_PASSWORD_TEXT = """Hello {username},

Please reset your password by opening the link below (valid for {ttl_minutes} minutes):
{link}

If you did not request a password reset you can ignore this email.
"""

RESET_PASSWORD_HTML = """
<div>
    <h1>Hello, {username}</h1>
    <p>Please click the following link to reset your password</p>
    <p>If this password reset request is not created by you then you can ignore this email.</p>
    <a href="{link}">Reset Password Now</a>
</div>
"""

PASSWORD_CHANGED_SUBJECT = "Password Reset Successful"

PASSWORD_CHANGED_TEXT = """Hello {username},

Your password has been reset successfully.
If this was not done by you please contact {support_email}.
"""

PASSWORD_CHANGED_HTML = """
<div>
    <h1>Hello, {username}</h1>
    <p>Your password has been reset successfully.</p>
    <p>If this was not done by you please contact {support_email} as soon as possible.</p>
</div>
"""
