"""Email Service for rendering templates and delivering messages.

Templates are rendered with Jinja2 and delivered over SMTP with fastapi-mail.
In test mode nothing leaves the process: messages are logged and the most
recent ones are kept in ``sent_messages`` so suites can inspect them.
"""

from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Deque, Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType
from fastapi_mail.schemas import MultipartSubtypeEnum
from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound, select_autoescape
from structlog import get_logger

from src.core.config.email import EmailSettings
from src.core.exceptions import EmailServiceError, TemplateRenderError
from src.utils.masking import mask_email

logger = get_logger(__name__)

SENT_MESSAGES_LIMIT = 50


@dataclass(frozen=True)
class OutgoingEmail:
    """A message as handed to the transport."""

    to_email: str
    subject: str
    html_content: str
    text_content: Optional[str] = None


class EmailService:
    """Infrastructure service for template rendering and SMTP delivery.

    Security features:
    - HTML templates are auto-escaped, plain-text templates are not
    - Certificates are always validated
    - Recipient addresses are masked in logs

    Attributes:
        settings: Email configuration settings
        jinja_env: Jinja2 environment for template rendering
        fastmail: FastMail instance, None in test mode
        sent_messages: Latest ``SENT_MESSAGES_LIMIT`` messages captured in test mode
    """

    def __init__(self, settings: EmailSettings):
        self.settings = settings
        self.sent_messages: Deque[OutgoingEmail] = deque(maxlen=SENT_MESSAGES_LIMIT)
        self._setup_jinja_environment()
        self._setup_fastmail()

        logger.info(
            "Email service initialized",
            test_mode=settings.EMAIL_TEST_MODE,
            smtp_host=settings.EMAIL_SMTP_HOST,
            templates_dir=settings.EMAIL_TEMPLATES_DIR,
        )

    @property
    def test_mode(self) -> bool:
        return self.settings.EMAIL_TEST_MODE

    def _setup_jinja_environment(self) -> None:
        template_dir = Path(self.settings.EMAIL_TEMPLATES_DIR)
        if not template_dir.is_dir():
            raise EmailServiceError(f"Email templates directory not found: {template_dir}")

        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def _setup_fastmail(self) -> None:
        """Configure SMTP delivery; skipped entirely in test mode."""
        if self.settings.EMAIL_TEST_MODE:
            self.fastmail = None
            logger.info("Email service in test mode - emails will be logged")
            return

        password = self.settings.EMAIL_SMTP_PASSWORD
        try:
            config = ConnectionConfig(
                MAIL_USERNAME=self.settings.EMAIL_SMTP_USERNAME or "",
                MAIL_PASSWORD=password.get_secret_value() if password else "",
                MAIL_FROM=self.settings.EMAIL_FROM_EMAIL,
                MAIL_FROM_NAME=self.settings.EMAIL_FROM_NAME,
                MAIL_PORT=self.settings.EMAIL_SMTP_PORT,
                MAIL_SERVER=self.settings.EMAIL_SMTP_HOST,
                MAIL_STARTTLS=self.settings.EMAIL_SMTP_USE_TLS,
                MAIL_SSL_TLS=self.settings.EMAIL_SMTP_USE_SSL,
                USE_CREDENTIALS=bool(self.settings.EMAIL_SMTP_USERNAME and password),
                VALIDATE_CERTS=True,
            )
        except ValueError as e:
            logger.error("Failed to configure FastMail", error=str(e))
            raise EmailServiceError(f"Failed to configure email service: {e}") from e

        self.fastmail = FastMail(config)
        logger.info("FastMail configured for SMTP delivery")

    def render_template(self, template_name: str, **context: Any) -> str:
        """Render ``template_name`` with ``context``.

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            rendered = self.jinja_env.get_template(template_name).render(**context)
        except TemplateNotFound as e:
            logger.error("Template not found", template=template_name)
            raise TemplateRenderError(f"Template file not found: {template_name}") from e
        except TemplateError as e:
            logger.error("Template rendering failed", template=template_name, error=str(e))
            raise TemplateRenderError(f"Template rendering failed: {e}") from e

        logger.debug(
            "Template rendered",
            template=template_name,
            context_keys=sorted(context.keys()),
        )
        return rendered

    async def send_email(
        self,
        to_email: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
    ) -> None:
        """Deliver a message with an HTML body and optional plain-text alternative.

        Raises:
            EmailServiceError: If the SMTP transport fails
        """
        message = OutgoingEmail(to_email, subject, html_content, text_content)

        if self.fastmail is None:
            self.sent_messages.append(message)
            logger.info(
                "Email sent in test mode",
                to_email=mask_email(to_email),
                subject=subject,
                html_length=len(html_content),
                text_length=len(text_content) if text_content else 0,
            )
            return

        schema = MessageSchema(
            subject=subject,
            recipients=[to_email],
            body=html_content,
            subtype=MessageType.html,
            alternative_body=text_content,
            multipart_subtype=(
                MultipartSubtypeEnum.alternative if text_content else MultipartSubtypeEnum.mixed
            ),
        )
        try:
            await self.fastmail.send_message(schema)
        except Exception as e:
            logger.error(
                "Failed to send email",
                to_email=mask_email(to_email),
                subject=subject,
                error=str(e),
            )
            raise EmailServiceError(f"Failed to send email: {e}") from e

        logger.info("Email sent", to_email=mask_email(to_email), subject=subject)
