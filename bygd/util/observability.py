"""Observability configuration using Logfire.

Services log and trace through logfire directly:

    import logfire

    logfire.info("Comment created", comment_id=str(comment.id))

    with logfire.span("comment_service.reply", post_id=str(post_id)):
        ...
"""

import logfire

from bygd.config import Settings


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for observability.

    Cloud sending is on when explicitly enabled, or when a token is
    present and sending was not explicitly disabled.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    if observability.send_to_logfire is not None:
        send_to_logfire = observability.send_to_logfire
    else:
        send_to_logfire = bool(observability.logfire_token)

    config_kwargs = {
        "service_name": "bygd",
        "service_version": "0.1.0",
        "environment": settings.environment,
        "send_to_logfire": send_to_logfire,
        "console": (
            logfire.ConsoleOptions(
                colors="auto",
                span_style="show-parents",
                include_timestamps=True,
                verbose=settings.debug,
            )
            if observability.console
            else False
        ),
    }
    if observability.logfire_token:
        config_kwargs["token"] = observability.logfire_token

    logfire.configure(**config_kwargs)

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        debug=settings.debug,
        send_to_logfire=send_to_logfire,
        has_token=bool(observability.logfire_token),
    )


def instrument_httpx() -> None:
    """Trace every outbound request to the hosted backend."""
    logfire.instrument_httpx()
    logfire.info("httpx instrumented")
