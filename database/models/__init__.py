from .base import Base
from .center import Center, CenterOperatingHour, CenterHoliday, CenterStaff, CenterProgram
from .recommendation import RecommendationLog

__all__ = [
    'Base',
    'Center',
    'CenterOperatingHour',
    'CenterHoliday',
    'CenterStaff',
    'CenterProgram',
    'RecommendationLog',
]
