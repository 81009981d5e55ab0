"""Celery tasks for push notifications."""
import logging

import httpx

from wolfpack.core.celery_app import celery_app
from wolfpack.core.config import settings

logger = logging.getLogger(__name__)


@celery_app.task
def send_push_notification(tokens: list[str], title: str, body: str, data: dict | None = None) -> int:
    """Send one push per device token through FCM. Returns the number accepted."""
    if not settings.FCM_SERVER_KEY:
        logger.debug("FCM_SERVER_KEY not set, skipping push to %d device(s)", len(tokens))
        return 0

    headers = {
        "Authorization": f"key={settings.FCM_SERVER_KEY}",
        "Content-Type": "application/json",
    }
    sent = 0
    with httpx.Client(timeout=10) as client:
        for token in tokens:
            payload = {
                "to": token,
                "notification": {"title": title, "body": body},
                "data": data or {},
            }
            try:
                response = client.post(settings.FCM_SEND_URL, json=payload, headers=headers)
            except httpx.HTTPError as e:
                logger.error("Push request failed: %s", e)
                continue
            if response.status_code == 200:
                sent += 1
            else:
                logger.error("FCM error: %s - %s", response.status_code, response.text)
    return sent
