from typing import Optional

from .models import StoreSettings


def get_store_settings() -> Optional[StoreSettings]:
    return StoreSettings.objects.filter(pk=StoreSettings.SINGLETON_ID).first()
