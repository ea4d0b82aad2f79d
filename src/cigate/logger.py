import logging

import notifiers.logging

from cigate import config


def get_log_handlers(logger):
    if config.TELEGRAM_TOKEN is None:
        return []
    handler = notifiers.logging.NotificationHandler(
        "telegram",
        defaults={
            "token": config.TELEGRAM_TOKEN,
            "chat_id": config.TELEGRAM_CHAT_ID,
        },
    )
    handler.setLevel(logging.WARNING)
    logger.addHandler(handler)
    return [handler]


def setup_logging():
    logging.basicConfig(
        format="%(asctime)s %(name)s %(levelname)s - %(message)s", level=logging.INFO
    )
    logging.getLogger().setLevel(config.OVERRIDE_LOGGING)
    logger = logging.getLogger("cigate")
    logger.setLevel(config.OVERRIDE_LOGGING)
    return get_log_handlers(logger)
