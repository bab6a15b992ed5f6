from typing import Any, Dict, List, Optional

from supabase_client import get_supabase

TABLE_NAME = "orders"


def insert_order(record: Dict[str, Any]) -> Dict[str, Any]:
    response = get_supabase().table(TABLE_NAME).insert(record).execute()
    if not response.data:
        raise RuntimeError("Failed to store order")
    return response.data[0]


def update_order_status(order_id: str, status_value: str) -> Optional[Dict[str, Any]]:
    response = (
        get_supabase()
        .table(TABLE_NAME)
        .update({"status": status_value})
        .eq("id", order_id)
        .execute()
    )
    items = response.data or []
    return items[0] if items else None


def fetch_orders(limit: int, status_value: Optional[str] = None) -> List[Dict[str, Any]]:
    query = (
        get_supabase()
        .table(TABLE_NAME)
        .select("id,status,created_at,payload")
        .order("created_at", desc=True)
        .limit(limit)
    )
    if status_value:
        query = query.eq("status", status_value)
    response = query.execute()
    return response.data or []
