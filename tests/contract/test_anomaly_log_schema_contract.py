from __future__ import annotations

import json

from hr_audit.models.anomaly_record import AnomalyRecord

"""Anomaly log line contract: fixed key set, no extras."""


def test_anomaly_line_keys_and_types():
    data = json.loads(AnomalyRecord.create("Employees", -1, "LOOKUP_MISS", "msg").to_json_line())
    assert list(data) == ["timestamp", "sheet", "row", "anomaly_type", "message"]
    assert isinstance(data["row"], int)
    assert data["anomaly_type"].isupper()
