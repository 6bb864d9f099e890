from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.services.forwards.enums import EventKind


class ForwardInfo(BaseModel):
    id: str = Field(..., description="Forward id, used to stop it")
    pid: int = Field(..., description="PID of the socat process")
    base_ip: str = Field(..., description="Address socat listens on")
    base_port: int = Field(..., description="Port socat listens on")
    remote_ip: str = Field(..., description="Address traffic is relayed to")
    remote_port: int = Field(..., description="Port traffic is relayed to")
    started_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventInfo(BaseModel):
    timestamp: datetime
    kind: EventKind = Field(..., description="Start, Stop or Died")
    details: str

    class Config:
        from_attributes = True


class HealthResponse(BaseModel):
    status: str
    socat_available: bool
    tracked_forwards: int
    version: str
