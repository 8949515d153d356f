"""
Server API routes.

Endpoints:
- GET /api/server              - Installed software versions
- GET /api/server/ip           - Server IP address
- GET /api/requirements        - Requirements document
- GET /api/status              - Status of everything the server runs
- GET /api/status/{software}   - Status of one software key
"""

import secrets
from typing import Any, Dict, Iterator, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel

from wp_supervisor.engine.server import Server
from wp_supervisor.engine.status import SOFTWARE_KEYS, is_known_software


class DatabaseResponse(BaseModel):
    service: str
    version: str


class WebServerResponse(BaseModel):
    service: str
    version: Optional[str] = None


class ServerDataResponse(BaseModel):
    """Installed software versions."""
    database: DatabaseResponse
    php: str
    wp: str
    web: Optional[WebServerResponse] = None


class IPResponse(BaseModel):
    ip: Optional[str] = None


class StatusResponse(BaseModel):
    """Status of a single software key."""
    software: str
    status: str


class StatusesResponse(BaseModel):
    statuses: Dict[str, Optional[str]]


def require_admin(request: Request, x_admin_token: Optional[str] = Header(None)) -> None:
    """Only admins may read server details when a token is configured."""
    expected = request.app.state.settings.admin_token
    if not expected:
        return
    if not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(status_code=403, detail="Admin token required")


def get_server(request: Request) -> Iterator[Server]:
    """Open the configured site for the duration of one request."""
    try:
        with request.app.state.server_factory() as server:
            yield server
    except ConnectionError as e:
        raise HTTPException(status_code=502, detail=f"Cannot reach server: {e}")


def known_software(software: str) -> str:
    """Reject unknown keys before the server is touched."""
    if not is_known_software(software):
        raise HTTPException(
            status_code=404,
            detail=f"Unknown software {software!r}, expected one of {', '.join(SOFTWARE_KEYS)}",
        )
    return software


router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/server", response_model=ServerDataResponse)
def get_server_data(server: Server = Depends(get_server)) -> Any:
    return server.get_data().to_dict()


@router.get("/server/ip", response_model=IPResponse)
def get_server_ip(server: Server = Depends(get_server)) -> IPResponse:
    return IPResponse(ip=server.get_ip())


@router.get("/requirements")
def get_requirements(server: Server = Depends(get_server)) -> Dict[str, Any]:
    requirements = server.get_requirements()
    if not requirements:
        raise HTTPException(status_code=503, detail="Requirements unavailable")
    return requirements


@router.get("/status", response_model=StatusesResponse)
def get_statuses(server: Server = Depends(get_server)) -> StatusesResponse:
    statuses = server.statuses()
    return StatusesResponse(
        statuses={software: status.value if status else None for software, status in statuses.items()}
    )


@router.get("/status/{software}", response_model=StatusResponse)
def get_status(
    software: str = Depends(known_software),
    server: Server = Depends(get_server),
) -> StatusResponse:
    status = server.is_updated(software)
    if status is None:
        raise HTTPException(status_code=503, detail=f"Status of {software} could not be determined")
    return StatusResponse(software=software, status=status.value)
