# -*- coding: utf-8 -*-
from __future__ import annotations

from fastapi import Request

from ...config.paths import PathsOptions


def get_paths_options(request: Request) -> PathsOptions:
    """Path overrides the app was created with (see ``create_app``)."""
    return getattr(request.app.state, "paths_options", None) or PathsOptions()
