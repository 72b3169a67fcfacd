import os

AUTO_CONFIGURE_ENV = "WEBFIT_CONFIGURE_LOGGING"


def configure_loguru(level: str | None = None) -> None:
    """Install the loguru sink; settings are only read once this is called."""
    from config.logger import configure_loguru as _configure

    _configure(level)


if os.environ.get(AUTO_CONFIGURE_ENV, "").lower() in {"1", "true", "yes"}:
    configure_loguru()
