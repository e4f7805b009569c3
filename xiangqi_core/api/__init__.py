"""
API Module

FastAPI endpoints for the Xiangqi game.
"""

from xiangqi_core.api.app import create_app

__all__ = ["create_app"]
