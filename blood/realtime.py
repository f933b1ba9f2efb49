from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction


def hospital_group(hospital_id) -> str:
    return f"hospital_{hospital_id}"


def push_hospital_event(hospital_id, data: dict):
    """
    Fire-and-forget push to the hospital dashboard group.
    If nobody is connected the message is simply dropped.
    """
    channel_layer = get_channel_layer()
    if channel_layer is None:
        return
    async_to_sync(channel_layer.group_send)(
        hospital_group(hospital_id),
        {"type": "hospital_event", "data": data},
    )


def push_after_commit(hospital_id, data: dict):
    transaction.on_commit(lambda: push_hospital_event(hospital_id, data))


def request_created_event(req) -> dict:
    return {
        "type": "REQUEST_CREATED",
        "request_id": req.id,
        "blood_type": req.blood_type,
        "units_needed": req.units_needed,
        "urgency": req.urgency,
        "requester_name": req.requester_name,
    }


def inventory_updated_event(hospital_id, blood_types, source: str) -> dict:
    """
    source: BULK_UPDATE / DONATION
    """
    return {
        "type": "INVENTORY_UPDATED",
        "hospital_id": hospital_id,
        "blood_types": sorted(set(blood_types)),
        "source": source,
    }
