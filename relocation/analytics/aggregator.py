from __future__ import annotations

from collections import Counter
from typing import Any

QUESTION_KEYS = (
    "q1_work_mode",
    "q2_income_stability",
    "q3_household",
    "q4_priority",
    "q5_budget",
    "q6_duration",
    "q7_timing",
)


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    matches = [e for e in events if e["type"] == "match"]
    total = len(matches)

    # Average response time
    times = [m["response_time_ms"] for m in matches if "response_time_ms" in m]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Regions of the top pick
    region_counter: Counter[str] = Counter()
    for m in matches:
        if m.get("top_region"):
            region_counter[m["top_region"]] += 1
    top_regions = [{"name": n, "count": c} for n, c in region_counter.most_common(10)]

    # How often each question was answered
    answer_counts = {k: 0 for k in QUESTION_KEYS}
    for m in matches:
        for key in m.get("answered", []) or []:
            if key in answer_counts:
                answer_counts[key] += 1
    answer_usage = {
        k: round(v / total * 100, 1) if total else 0.0
        for k, v in answer_counts.items()
    }

    top_scores = [m["top_score"] for m in matches if m.get("top_score") is not None]

    return {
        "total_matches": total,
        "avg_response_time_ms": avg_time,
        "avg_top_score": round(sum(top_scores) / len(top_scores), 1) if top_scores else 0.0,
        "top_regions": top_regions,
        "answer_usage": answer_usage,
        "persistence": {
            "saved": sum(m.get("persisted", 0) for m in matches),
            "failed": sum(m.get("persist_failures", 0) for m in matches),
        },
    }
