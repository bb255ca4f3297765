from hiretrack.config.settings import MailConfig

from .smtp_transport import LoggingMailTransport, SmtpMailTransport, build_message


def build_mail_transport(config: MailConfig):
    """SMTP when a host is configured, otherwise log-only delivery."""
    if config.smtp_host:
        return SmtpMailTransport.from_config(config)
    return LoggingMailTransport()


__all__ = ["LoggingMailTransport", "SmtpMailTransport", "build_mail_transport", "build_message"]
