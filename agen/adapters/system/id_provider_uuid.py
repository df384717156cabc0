from agen.ports.id_provider import IdProvider
from agen.domain.task import TaskId
import uuid

class UuidIdProvider(IdProvider):

    def new_id(self) -> TaskId:
        return TaskId(str(uuid.uuid4()))
