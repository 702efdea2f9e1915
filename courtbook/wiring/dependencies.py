from functools import lru_cache
import logging
from datetime import timedelta
from zoneinfo import ZoneInfo

from courtbook.application.ports.booking_store import BookingStorePort
from courtbook.application.ports.discount_codes import DiscountCodePort
from courtbook.application.ports.notifier import NotifierPort
from courtbook.application.ports.resource_catalog import ResourceCatalogPort
from courtbook.application.use_cases.booking_lifecycle import BookingLifecycleManager
from courtbook.core.config import settings
from courtbook.core.logging import configure_logging
from courtbook.infrastructure.auth.ownership_policy import OwnershipPolicy
from courtbook.infrastructure.catalog.discount_code_store import DiscountCodeStore
from courtbook.infrastructure.catalog.resource_catalog_store import ResourceCatalogStore
from courtbook.infrastructure.notifier.logging_notifier import LoggingNotifier
from courtbook.infrastructure.notifier.webhook_notifier import WebhookNotifier
from courtbook.infrastructure.store.json_store import JsonBookingStore
from courtbook.infrastructure.store.memory_store import MemoryBookingStore


@lru_cache
def get_booking_store() -> BookingStorePort:
    if settings.STORE_PROVIDER.lower() == "json":
        return JsonBookingStore(data_dir=settings.DATA_DIR)
    return MemoryBookingStore()


@lru_cache
def get_resource_catalog() -> ResourceCatalogPort:
    if settings.RESOURCE_CATALOG_PATH:
        return ResourceCatalogStore.from_json_file(settings.RESOURCE_CATALOG_PATH)
    return ResourceCatalogStore()


@lru_cache
def get_discount_codes() -> DiscountCodePort:
    if settings.DISCOUNT_CODES_PATH:
        return DiscountCodeStore.from_json_file(settings.DISCOUNT_CODES_PATH)
    return DiscountCodeStore()


@lru_cache
def get_notifier() -> NotifierPort:
    logger = logging.getLogger(__name__)
    if not settings.NOTIFIER_WEBHOOK_URL:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using LoggingNotifier (webhook URL missing, ENV=dev/local)")
            return LoggingNotifier()
        raise ValueError("NOTIFIER_WEBHOOK_URL is required outside dev/local.")

    logger.info("Using WebhookNotifier")
    return WebhookNotifier(
        endpoint=settings.NOTIFIER_WEBHOOK_URL,
        timeout=settings.NOTIFIER_TIMEOUT_SECONDS,
    )


@lru_cache
def get_lifecycle_manager() -> BookingLifecycleManager:
    configure_logging()
    return BookingLifecycleManager(
        catalog=get_resource_catalog(),
        store=get_booking_store(),
        notifier=get_notifier(),
        authorization=OwnershipPolicy(),
        timezone=ZoneInfo(settings.BUSINESS_TIMEZONE),
        discount_codes=get_discount_codes(),
        min_duration=timedelta(minutes=settings.MIN_BOOKING_MINUTES),
        billing_granularity=timedelta(minutes=settings.BILLING_GRANULARITY_MINUTES),
        slot_granularity=timedelta(minutes=settings.SLOT_GRANULARITY_MINUTES),
    )
