"""
Read-only queries behind the dashboard charts and the property search.

Suburb documents carry the aggregate statistics (medianHousePrice, ...);
property documents reference their suburb through suburbId, e.g.
"VIC-footscray" (state code, dash, suburb name without spaces, lower case).
"""
import re
from typing import Any, Dict, List, Optional

SEARCH_LIMIT = 50
MAX_SAFE_INTEGER = 2 ** 53 - 1


def suburb_slug(name: str) -> str:
    return re.sub(r"\s+", "", name).lower()


def region_condition(region: str) -> Optional[Dict[str, str]]:
    """
    suburbId filter for free-text region input:
    'footscray' matches any state's footscray, 'VIC-footscray' matches exactly.
    """
    region = (region or "").strip()
    if not region:
        return None
    if "-" in region:
        state, _, suburb = region.partition("-")
        return {"$regex": f"^{re.escape(state.strip())}-{re.escape(suburb_slug(suburb))}$", "$options": "i"}
    return {"$regex": f"-{re.escape(suburb_slug(region))}$", "$options": "i"}


def state_condition(state: str) -> Dict[str, str]:
    return {"$regex": f"^{re.escape(state.strip())}-", "$options": "i"}


def get_states(db) -> List[str]:
    return sorted(state for state in db.suburbs.distinct("state") if state)


def get_suburbs(db, state: Optional[str] = None) -> List[str]:
    query = {"state": state} if state else {}
    return sorted(name for name in db.suburbs.distinct("name", query) if name)


def fetch_suburb_overviews(db) -> List[Dict[str, Any]]:
    return list(db.suburbs.find({}))


def get_bar_chart_data(db, state: Optional[str] = None) -> List[Dict[str, Any]]:
    """Median house price per suburb, most expensive first."""
    pipeline = []
    if state:
        pipeline.append({"$match": {"state": state}})
    pipeline += [
        {"$project": {"_id": 0, "suburb": "$name", "medianPrice": "$medianHousePrice"}},
        {"$sort": {"medianPrice": -1, "suburb": 1}},
    ]
    return list(db.suburbs.aggregate(pipeline))


def get_line_graph_data(db, suburb: Optional[str] = None) -> List[Dict[str, Any]]:
    """Average property price per calendar year, oldest year first."""
    pipeline = []
    condition = region_condition(suburb) if suburb else None
    if condition:
        pipeline.append({"$match": {"suburbId": condition}})
    pipeline += [
        {"$group": {"_id": {"$year": "$date"}, "avgPrice": {"$avg": "$price"}}},
        {"$sort": {"_id": 1}},
        {"$project": {"_id": 0, "year": "$_id", "avgPrice": {"$round": ["$avgPrice", 0]}}},
    ]
    return list(db.properties.aggregate(pipeline))


def get_city_comparison_data(db) -> List[Dict[str, Any]]:
    """Average of suburb median prices per state."""
    pipeline = [
        {"$group": {"_id": "$state", "avgMedianPrice": {"$avg": "$medianHousePrice"}}},
        {"$sort": {"_id": 1}},
        {"$project": {"_id": 0, "state": "$_id", "avgMedianPrice": {"$round": ["$avgMedianPrice", 0]}}},
    ]
    return list(db.suburbs.aggregate(pipeline))


def get_stats(db, state: Optional[str] = None, suburb: Optional[str] = None) -> Dict[str, Any]:
    """Min/max/average property price for a suburb, a state or everything."""
    match = {}
    if suburb:
        region = f"{state}-{suburb}" if state and "-" not in suburb else suburb
        match["suburbId"] = region_condition(region)
    elif state:
        match["suburbId"] = state_condition(state)

    pipeline = []
    if match:
        pipeline.append({"$match": match})
    pipeline.append({
        "$group": {
            "_id": None,
            "minPrice": {"$min": "$price"},
            "maxPrice": {"$max": "$price"},
            "avgPrice": {"$avg": "$price"},
            "count": {"$sum": 1},
        }
    })

    results = list(db.properties.aggregate(pipeline))
    if not results:
        return {"minPrice": 0, "maxPrice": 0, "avgPrice": 0, "count": 0}

    stats = results[0]
    return {
        "minPrice": stats.get("minPrice") or 0,
        "maxPrice": stats.get("maxPrice") or 0,
        "avgPrice": round(stats.get("avgPrice") or 0),
        "count": stats.get("count", 0),
    }


def _reject_server_side_js(query: Any):
    if isinstance(query, dict):
        for key, value in query.items():
            if key in ("$where", "$function", "$accumulator"):
                raise ValueError(f"Operator {key} is not allowed")
            _reject_server_side_js(value)
    elif isinstance(query, list):
        for item in query:
            _reject_server_side_js(item)


def fetch_properties(db, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
    query = query or {}
    if not isinstance(query, dict):
        raise ValueError("Property query must be a JSON object")
    _reject_server_side_js(query)
    return list(db.properties.find(query))


def search_properties(db, region: str = "", min_price: float = 0,
                      max_price: Optional[float] = None) -> Dict[str, Any]:
    """Latest listings in a price band, optionally limited to one suburb."""
    query: Dict[str, Any] = {
        "price": {"$gte": min_price, "$lte": MAX_SAFE_INTEGER if max_price is None else max_price},
    }
    condition = region_condition(region)
    if condition:
        query["suburbId"] = condition

    items = list(
        db.properties.find(query)
        .sort([("date", -1), ("price", -1)])
        .limit(SEARCH_LIMIT)
    )
    return {"items": items, "total": len(items), "query": query}
