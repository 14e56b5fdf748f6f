# -*- coding: utf-8 -*-
from .backups import router as backups_router
from .providers import router as providers_router

__all__ = ["backups_router", "providers_router"]
