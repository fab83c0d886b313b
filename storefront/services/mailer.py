# storefront/services/mailer.py
import smtplib
from email.message import EmailMessage

from storefront.utils.settings import MAIL_HOST, MAIL_PORT, MAIL_USER, MAIL_PASS, MAIL_FROM


def make_a_nice_email(text: str) -> str:
    return f"""
    <div class="email" style="
      border: 1px solid black;
      padding: 20px;
      font-family: sans-serif;
      line-height: 2;
      font-size: 20px;
    ">
      <h2>Hello There!</h2>
      <p>{text}</p>
    </div>
    """


def send_mail(to: str, subject: str, html: str) -> None:
    message = EmailMessage()
    message["From"] = MAIL_FROM
    message["To"] = to
    message["Subject"] = subject
    message.set_content(html, subtype="html")

    with smtplib.SMTP(MAIL_HOST, MAIL_PORT, timeout=10) as smtp:
        if MAIL_USER:
            smtp.login(MAIL_USER, MAIL_PASS)
        smtp.send_message(message)
