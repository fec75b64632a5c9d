from datetime import time

import pytest

from src.attendance_engine.attendance_engine.attendance.classifier import StatusClassifier
from src.attendance_engine.attendance_engine.attendance.policy import AttendancePolicy
from src.attendance_engine.attendance_engine.attendance.strategies.override_strategy import OverrideStrategy
from src.attendance_engine.attendance_engine.core.enums import AttendanceStatus, LateEarlyPrecedence
from src.attendance_engine.attendance_engine.core.exceptions import InvalidTimeFormat, ValidationError


@pytest.mark.parametrize(
    "override", [AttendanceStatus.WEEKEND, AttendanceStatus.ON_LEAVE, AttendanceStatus.MISSION]
)
def test_override_wins_regardless_of_times(override):
    classifier = StatusClassifier()
    assert classifier.classify(check_in="10:30", check_out="12:00", override=override, is_past=True) == override
    assert classifier.classify(check_in=None, override=override, is_past=True) == override


def test_past_day_without_check_in_is_absent():
    assert StatusClassifier().classify(check_in=None, is_past=True) == AttendanceStatus.ABSENT


def test_today_without_check_in_is_not_absent_yet():
    assert StatusClassifier().classify(check_in=None, is_past=False) == AttendanceStatus.PRESENT


def test_on_time_full_day_is_present():
    assert StatusClassifier().classify(check_in="08:00", check_out="17:00") == AttendanceStatus.PRESENT


def test_late_arrival_is_late():
    assert StatusClassifier().classify(check_in="09:15", check_out="17:00") == AttendanceStatus.LATE


def test_early_check_out_demotes_present_only():
    classifier = StatusClassifier()
    assert classifier.classify(check_in="08:00", check_out="15:30") == AttendanceStatus.EARLY_LEAVE
    assert classifier.classify(check_in="09:15", check_out="15:30") == AttendanceStatus.LATE


def test_open_day_is_not_demoted_before_check_out():
    assert StatusClassifier().classify(check_in="08:00") == AttendanceStatus.PRESENT


def test_early_leave_wins_policy_demotes_late_too():
    classifier = StatusClassifier(AttendancePolicy(precedence=LateEarlyPrecedence.EARLY_LEAVE_WINS))
    assert classifier.classify(check_in="09:15", check_out="15:30") == AttendanceStatus.EARLY_LEAVE


def test_custom_thresholds_are_respected():
    classifier = StatusClassifier(AttendancePolicy(late_threshold=time(8, 30), standard_end=time(16, 0)))
    assert classifier.classify(check_in="08:30", check_out="16:00") == AttendanceStatus.LATE
    assert classifier.classify(check_in="08:29", check_out="15:59") == AttendanceStatus.EARLY_LEAVE


def test_classification_is_idempotent():
    classifier = StatusClassifier()
    args = dict(check_in="08:10", check_out="16:45", override=None, is_past=True)
    assert classifier.classify(**args) == classifier.classify(**args)


def test_incremental_steps_match_check_in_and_check_out_rules():
    classifier = StatusClassifier()

    on_in = classifier.on_check_in(time(9, 20))
    assert on_in.status == AttendanceStatus.LATE
    assert on_in.note == "late by 20 min"

    assert classifier.on_check_out(AttendanceStatus.PRESENT, time(16, 59)).status == AttendanceStatus.EARLY_LEAVE
    assert classifier.on_check_out(AttendanceStatus.LATE, time(16, 59)).status == AttendanceStatus.LATE


def test_malformed_time_is_rejected():
    with pytest.raises(InvalidTimeFormat):
        StatusClassifier().classify(check_in="9 am")


def test_override_strategy_refuses_derived_statuses():
    with pytest.raises(ValidationError):
        OverrideStrategy(AttendanceStatus.LATE)
