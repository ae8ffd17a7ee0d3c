# backend/gym_fulfillment/schedule/schemas.py

"""
クラススケジュール関連のスキーマと静的データ。

- ClassName / DayName: 固定の列挙値
- ClassSession: 1コマ分のクラス（不変）
- WEEKLY_SCHEDULE: 曜日 → ClassSession 列の静的テーブル（起動時に1度だけ構築）
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ClassName(str, Enum):
    """ジムで提供しているクラスの種類。"""

    YOGA = "Yoga"
    CYCLING = "Cycling"
    DANCE = "Dance"
    KICKBOXING = "Kickboxing"


class DayName(str, Enum):
    """
    曜日名。プラットフォームが解決した値と大文字小文字まで一致する必要がある。

    並び順は日曜始まり。
    """

    SUNDAY = "Sunday"
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class SuggestionTitle(str, Enum):
    """サジェストチップのラベル。"""

    HOURS = "Ask about hours"
    CLASSES = "Learn about classes"
    DAILY = "Send daily reminders"
    NOTIFICATIONS = "Get notifications"


class ClassSession(BaseModel):
    """
    スケジュール上の 1コマ。

    start_time / end_time は "6am" のような表示用ラベルで、時刻としては解釈しない。
    """

    model_config = ConfigDict(frozen=True)

    name: ClassName = Field(..., description="クラス名")
    start_time: str = Field(..., description="開始時刻ラベル（例: 6am）")
    end_time: str = Field(..., description="終了時刻ラベル（例: 7am）")


class ScheduleAnswer(BaseModel):
    """
    classes_for_day() の結果。

    text はそのまま発話・表示できる文章。
    """

    day: DayName
    classes: List[str] = Field(
        ...,
        description='"<name> at <startTime>" 形式の重複なしリスト（初出順）。',
    )
    text: str
    suggestions: List[str] = Field(default_factory=list)


def _session(name: ClassName, start_time: str, end_time: str) -> ClassSession:
    return ClassSession(name=name, start_time=start_time, end_time=end_time)


def _standard_day(
    morning_first: ClassName,
    morning_second: ClassName,
    evening_first: ClassName,
    evening_second: ClassName,
) -> Tuple[ClassSession, ...]:
    # 全曜日とも 6-7am / 7-8am / 6-7pm / 7-8pm の4コマ構成
    return (
        _session(morning_first, "6am", "7am"),
        _session(morning_second, "7am", "8am"),
        _session(evening_first, "6pm", "7pm"),
        _session(evening_second, "7pm", "8pm"),
    )


_Y = ClassName.YOGA
_C = ClassName.CYCLING
_D = ClassName.DANCE
_K = ClassName.KICKBOXING

WEEKLY_SCHEDULE: Mapping[DayName, Tuple[ClassSession, ...]] = MappingProxyType(
    {
        DayName.MONDAY: _standard_day(_Y, _C, _D, _Y),
        DayName.TUESDAY: _standard_day(_K, _D, _D, _K),
        DayName.WEDNESDAY: _standard_day(_Y, _Y, _D, _Y),
        DayName.THURSDAY: _standard_day(_K, _C, _D, _K),
        DayName.FRIDAY: _standard_day(_Y, _Y, _D, _Y),
        DayName.SATURDAY: _standard_day(_C, _Y, _D, _K),
        DayName.SUNDAY: _standard_day(_C, _Y, _D, _K),
    }
)
