from .daily_component import DailyPrayerComponent
from .monthly_component import MonthlyCalendarComponent
from .yearly_component import YearlyCalendarComponent


def register_components(plugin_manager):
    """Register the daily, monthly and yearly views, in tab order"""
    plugin_manager.register_component(DailyPrayerComponent)
    plugin_manager.register_component(MonthlyCalendarComponent)
    plugin_manager.register_component(YearlyCalendarComponent)
