# Copyright Thales 2025
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


import logging
from typing import Optional

from fastapi import APIRouter, Request, Response, status

from shortlink_auth.services.permission.permission_service import PermissionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Monitoring"])


@router.get("/healthz", summary="Liveness check for Kubernetes")
async def healthz():
    return {"status": "ok"}


@router.get("/ready", summary="Readiness check for Kubernetes")
async def ready(request: Request, response: Response):
    service: Optional[PermissionService] = getattr(
        request.app.state, "permission_service", None
    )
    if service is None or not service.ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return {"status": "not ready"}
    return {
        "status": "ready",
        "synchronized": service.synchronized,
        "schemas": service.synchronization.paths,
    }
