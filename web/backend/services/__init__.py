"""Web service layer."""

from .center_service import CenterService

__all__ = ['CenterService']
