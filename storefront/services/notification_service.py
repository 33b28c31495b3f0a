# storefront/services/notification_service.py
from storefront.celery_worker import celery_app
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zamowieniach.
    Uzywa Celery do asynchronicznego przetwarzania.
    """

    def order_created(self, user_id: int, order_id: int):
        self._enqueue(user_id, order_id, "Pending")

    def order_status_changed(self, user_id: int, order_id: int, status: str):
        self._enqueue(user_id, order_id, status)

    @staticmethod
    def _enqueue(user_id: int, order_id: int, status: str):
        #powiadomienie nie moze wycofac zapisanego zamowienia
        try:
            send_order_notification_task.delay(user_id, order_id, status)
        except Exception:
            logger.exception(f"Failed to enqueue notification for order {order_id}")


@celery_app.task(name="storefront.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int, status: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is now {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status}
