# storefront/celery_worker.py
from celery import Celery

from storefront.utils.settings import Settings

celery_app = Celery("storefront")

#taski musza byc zaimportowane, zeby worker je zarejestrowal
celery_app.conf.imports = (
    "storefront.services.notification_service",
)
celery_app.conf.timezone = "UTC"


def configure_celery(settings: Settings) -> Celery:
    celery_app.conf.update(
        broker_url=settings.celery_broker_url,
        result_backend=settings.celery_result_backend,
        task_always_eager=settings.celery_task_always_eager,
        task_eager_propagates=settings.celery_task_always_eager,
    )
    return celery_app


if __name__ == "__main__":
    #python -m storefront.celery_worker
    configure_celery(Settings.from_env()).worker_main(["worker", "--loglevel=INFO"])
