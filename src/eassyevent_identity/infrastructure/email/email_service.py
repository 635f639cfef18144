import html
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from eassyevent_config.settings import Settings
from eassyevent_identity.exceptions import EmailDeliveryError

logger = logging.getLogger(__name__)

EMAIL_VERIFICATION_SUBJECT = "Email Verification - EassyEvent"

EMAIL_VERIFICATION_TEXT = """Hello {name},

Thank you for registering with EassyEvent! To complete your registration
and start managing your venue bookings, please verify your email address:
{verification_url}

This verification link will expire in 24 hours.

If you didn't create an account with EassyEvent, please ignore this email.

-- EassyEvent
"""

EMAIL_VERIFICATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto;">
        <div style="background: #4F46E5; color: #ffffff; padding: 20px; text-align: center;">
            <h1 style="margin: 0;">Welcome to EassyEvent!</h1>
        </div>
        <div style="padding: 30px; background: #f9f9f9;">
            <h2>Hello {name},</h2>
            <p>Thank you for registering with EassyEvent! To complete your registration and start managing your venue bookings, please verify your email address.</p>
            <p style="margin: 30px 0; text-align: center;">
                <a href="{verification_url}" style="display: inline-block; background: #4F46E5; color: #ffffff !important; padding: 12px 30px; text-decoration: none; border-radius: 5px;">Verify Email Address</a>
            </p>
            <p>If you can't click the button, copy and paste this link into your browser:</p>
            <p style="word-break: break-all;">{verification_url}</p>
            <p>This verification link will expire in 24 hours.</p>
            <p>If you didn't create an account with EassyEvent, please ignore this email.</p>
        </div>
    </div>
</body>
</html>
"""

PASSWORD_RESET_SUBJECT = "Password Reset - EassyEvent"

PASSWORD_RESET_TEXT = """Hello {name},

You requested a password reset for your EassyEvent account.

Open the link below to reset your password (valid for 10 minutes):
{reset_url}

If you didn't request this, you can safely ignore this email.

-- EassyEvent
"""

PASSWORD_RESET_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 20px;">
    <div style="max-width: 600px; margin: 0 auto;">
        <div style="background: #DC2626; color: #ffffff; padding: 20px; text-align: center;">
            <h1 style="margin: 0;">Password Reset Request</h1>
        </div>
        <div style="padding: 30px; background: #f9f9f9;">
            <h2>Hello {name},</h2>
            <p>You requested a password reset for your EassyEvent account.</p>
            <p style="margin: 30px 0; text-align: center;">
                <a href="{reset_url}" style="display: inline-block; background: #DC2626; color: #ffffff !important; padding: 12px 30px; text-decoration: none; border-radius: 5px;">Reset Password</a>
            </p>
            <p>If you can't click the button, copy and paste this link into your browser:</p>
            <p style="word-break: break-all;">{reset_url}</p>
            <p>This link will expire in 10 minutes.</p>
            <p>If you didn't request this, you can safely ignore this email.</p>
        </div>
    </div>
</body>
</html>
"""


class EmailService:
    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        text_body: str,
        html_body: str | None = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        msg.attach(MIMEText(text_body, "plain"))
        if html_body:
            msg.attach(MIMEText(html_body, "html"))

        return msg

    def _send_email(self, to_email: str, message: MIMEMultipart) -> None:
        if not self._settings.smtp_host:
            logger.error("SMTP host not configured")
            raise EmailDeliveryError

        smtp_password = (
            self._settings.smtp_password.get_secret_value()
            if self._settings.smtp_password
            else ""
        )

        try:
            if self._settings.smtp_use_tls and not self._settings.smtp_starttls:
                # Implicit TLS (port 465)
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                    context=context,
                ) as server:
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)
            else:
                # STARTTLS (port 587) or plain
                with smtplib.SMTP(
                    self._settings.smtp_host,
                    self._settings.smtp_port,
                ) as server:
                    if self._settings.smtp_starttls:
                        context = ssl.create_default_context()
                        server.starttls(context=context)
                    if self._settings.smtp_user:
                        server.login(self._settings.smtp_user, smtp_password)
                    server.send_message(message)

            logger.info("Email sent to %s", to_email)

        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise EmailDeliveryError from e

    def send_verification_email(
        self,
        to_email: str,
        name: str,
        verification_url: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping verification email to %s", to_email
            )
            return

        message = self._create_message(
            to_email=to_email,
            subject=EMAIL_VERIFICATION_SUBJECT,
            text_body=EMAIL_VERIFICATION_TEXT.format(
                name=name, verification_url=verification_url
            ),
            html_body=EMAIL_VERIFICATION_HTML.format(
                name=html.escape(name), verification_url=verification_url
            ),
        )
        self._send_email(to_email, message)

    def send_password_reset_email(
        self,
        to_email: str,
        name: str,
        reset_url: str,
    ) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping password reset email to %s", to_email
            )
            return

        message = self._create_message(
            to_email=to_email,
            subject=PASSWORD_RESET_SUBJECT,
            text_body=PASSWORD_RESET_TEXT.format(name=name, reset_url=reset_url),
            html_body=PASSWORD_RESET_HTML.format(
                name=html.escape(name), reset_url=reset_url
            ),
        )
        self._send_email(to_email, message)
