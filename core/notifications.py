# core/notifications.py
import requests

from core.config import settings
from core.logging_config import logger
from core.utils import utc_now


# -----------------------------------------------------
# 📨 Send webhook (Discord, Slack, etc.)
# -----------------------------------------------------
def send_webhook_message(message: str) -> bool:
    """
    Best-effort delivery: failures are logged, never raised.
    Returns True when the webhook accepted the message.
    """
    webhook_url = settings.NOTIFY_WEBHOOK_URL
    if not webhook_url:
        logger.debug("Webhook URL not configured, skipping.")
        return False

    try:
        response = requests.post(webhook_url, json={"content": message}, timeout=10)
        logger.info(f"Webhook sent (status {response.status_code})")
        return response.ok
    except requests.RequestException as e:
        logger.warning(f"Webhook failed: {e}")
        return False


# -----------------------------------------------------
# 🚪 Gate → resident notifications
# -----------------------------------------------------
def log_visitor_notification(visitor: dict, security_id: str):
    """Security notified the residents of a visitor's apartment."""
    logger.info(
        f"[{utc_now().isoformat()}] Security {security_id} notified "
        f"apartment {visitor.get('apartment_id')} about visitor {visitor['id']}"
    )
    send_webhook_message(
        f"Visitor {visitor.get('name')} is at the gate for apartment "
        f"{visitor.get('apartment_id')} ({visitor.get('purpose')})."
    )


def send_approval_request(visitor: dict, security_id: str):
    """Security asked the owner/tenant of the apartment to approve or deny a visitor."""
    logger.info(
        f"Security {security_id} requested approval for visitor {visitor['id']} "
        f"(apartment {visitor.get('apartment_id')})"
    )
    send_webhook_message(
        f"Approval needed: visitor {visitor.get('name')} for apartment "
        f"{visitor.get('apartment_id')} ({visitor.get('purpose')})."
    )
