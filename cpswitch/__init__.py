# -*- coding: utf-8 -*-
"""Switch Claude Code between saved API provider profiles."""

__version__ = "0.3.0"
