"""
クラススケジュール参照モジュール。

- schemas: ClassSession / DayName と静的な週間スケジュール
- service: 曜日ごとのクラス一覧を文章化する classes_for_day()
"""

from .schemas import ClassName, ClassSession, DayName, ScheduleAnswer, SuggestionTitle  # noqa: F401
from .service import InvalidDayError, ScheduleError, classes_for_day  # noqa: F401
