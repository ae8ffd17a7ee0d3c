# backend/gym_fulfillment/schedule/service.py

"""
曜日ごとのクラス一覧を回答するサービス層。

- 曜日名のバリデーション（7つの固定値との完全一致）
- "<name> at <startTime>" への射影と初出順での重複排除
- 発話用の文章とサジェストチップの組み立て
"""

from __future__ import annotations

from datetime import date
from typing import List, Mapping, Optional, Tuple

from .schemas import (
    WEEKLY_SCHEDULE,
    ClassSession,
    DayName,
    ScheduleAnswer,
    SuggestionTitle,
)

ANSWER_TEMPLATE = (
    "On {day} we offer the following classes: {classes}. "
    "Would you like to receive daily reminders of upcoming "
    "classes, subscribe to notifications about cancelations, or can I help "
    "you with anything else?"
)

# チップの表示順
ANSWER_SUGGESTIONS: Tuple[SuggestionTitle, ...] = (
    SuggestionTitle.DAILY,
    SuggestionTitle.NOTIFICATIONS,
    SuggestionTitle.HOURS,
)

# date.weekday() は月曜 = 0
_DAYS_BY_WEEKDAY: Tuple[DayName, ...] = (
    DayName.MONDAY,
    DayName.TUESDAY,
    DayName.WEDNESDAY,
    DayName.THURSDAY,
    DayName.FRIDAY,
    DayName.SATURDAY,
    DayName.SUNDAY,
)


class ScheduleError(Exception):
    """スケジュール参照全般の基底例外。"""


class InvalidDayError(ScheduleError):
    """曜日名が固定の7曜日のいずれとも一致しない場合の例外。"""

    def __init__(self, day: str) -> None:
        super().__init__(f"Unknown day name: {day!r}")
        self.day = day


def day_name_for(value: date) -> DayName:
    """日付からその曜日名を返す。"""
    return _DAYS_BY_WEEKDAY[value.weekday()]


def parse_day(day: str) -> DayName:
    """
    文字列を DayName に変換する。

    大文字小文字も含めて完全一致のみ受け付け、それ以外は InvalidDayError。
    """
    try:
        return DayName(day)
    except ValueError as exc:
        raise InvalidDayError(day) from exc


def format_sessions(sessions: Tuple[ClassSession, ...]) -> List[str]:
    """
    ClassSession 列を "<name> at <startTime>" に射影し、初出順を保ったまま重複を除く。
    """
    labels = (f"{s.name.value} at {s.start_time}" for s in sessions)
    return list(dict.fromkeys(labels))


def classes_for_day(
    day: Optional[str] = None,
    *,
    today: Optional[date] = None,
    schedule: Mapping[DayName, Tuple[ClassSession, ...]] = WEEKLY_SCHEDULE,
) -> ScheduleAnswer:
    """
    指定された曜日に開講しているクラスを文章で返す。

    :param day: プラットフォームが解決した曜日名。未指定ならサーバのローカル日付の曜日。
    :param today: 「今日」として扱う日付（テスト用。デフォルトは date.today()）
    :raises InvalidDayError: day が固定の曜日名と一致しない場合。
    """
    if day:
        day_name = parse_day(day)
    else:
        day_name = day_name_for(today or date.today())

    classes = format_sessions(schedule[day_name])
    text = ANSWER_TEMPLATE.format(day=day_name.value, classes=", ".join(classes))

    return ScheduleAnswer(
        day=day_name,
        classes=classes,
        text=text,
        suggestions=[s.value for s in ANSWER_SUGGESTIONS],
    )
