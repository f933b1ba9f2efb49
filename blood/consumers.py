from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer
from django.contrib.auth.models import AnonymousUser

from core.api import MAX_DB_ID
from hospitals.models import Hospital
from .realtime import hospital_group


class HospitalDashboardConsumer(AsyncJsonWebsocketConsumer):
    """
    Hospital owner listens for new requests and stock changes.
    Joins group: hospital_<id>
    """
    async def connect(self):
        user = self.scope.get("user", None)
        if not user or isinstance(user, AnonymousUser) or not user.is_authenticated:
            await self.close()
            return

        self.hospital_id = self.scope["url_route"]["kwargs"]["hospital_id"]
        if not await self._owns_hospital(user.id):
            await self.close()
            return

        self.group_name = hospital_group(self.hospital_id)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()

    @database_sync_to_async
    def _owns_hospital(self, user_id):
        if self.hospital_id > MAX_DB_ID:
            return False
        return Hospital.objects.filter(id=self.hospital_id, owner_id=user_id, is_active=True).exists()

    async def disconnect(self, close_code):
        if hasattr(self, "group_name"):
            await self.channel_layer.group_discard(self.group_name, self.channel_name)

    async def hospital_event(self, event):
        await self.send_json(event.get("data", {}))
