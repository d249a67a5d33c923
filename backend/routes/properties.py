"""
Properties Router — PropertyInsights
====================================

Endpoints:
----------
- GET /properties                          → property list
- GET /properties/{property_id}/analysis   → metrics, scenarios, value timeline,
                                             appreciation and capital-recovery estimate

Design:
-------
• Thin JSON layer over analytics.property_metrics.analyze_property
• Unknown property ids → 404
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from analytics.property_metrics import analyze_property
from analytics.snapshot import PortfolioSnapshot
from backend.dependencies import get_snapshot, require_property

# --------------------------------------------------------------------------- #
# Router Init
# --------------------------------------------------------------------------- #

router = APIRouter(tags=["properties"])


@router.get("")
def list_properties(snapshot: PortfolioSnapshot = Depends(get_snapshot)) -> List[Dict[str, Any]]:
    """
    Portfolio properties ordered by id, with the display label.
    """
    return [
        {
            "property_id": p.property_id,
            "address": p.address,
            "city": p.city,
            "label": p.label,
            "purchase_price": p.purchase_price,
            "market_value_est": p.market_value_est,
        }
        for p in snapshot.properties
    ]


@router.get("/{property_id}/analysis")
def property_analysis(
    property_id: str,
    snapshot: PortfolioSnapshot = Depends(get_snapshot),
) -> Dict[str, Any]:
    """
    Everything the Property Analysis panel shows for one property.
    """
    prop = require_property(snapshot, property_id)
    a = analyze_property(
        prop,
        snapshot.capital_transactions,
        snapshot.scenarios,
        snapshot.valuations,
    )
    return {
        "property": prop.model_dump(mode="json"),
        "metrics": asdict(a.metrics),
        "capital_transactions": [t.model_dump(mode="json") for t in a.capital_transactions],
        "scenarios": [asdict(s) for s in a.scenarios],
        "value_points": [
            {"date": p.date.isoformat(), "value": p.value, "label": p.label}
            for p in a.value_points
        ],
        "appreciation": asdict(a.appreciation) if a.appreciation else None,
        "target": a.target,
        "breakeven": a.breakeven.as_dict() if a.breakeven else None,
    }
