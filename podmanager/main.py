"""
FastAPI application exposing the pod manager to GUI front-ends.
"""
import os
import shutil
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query

from .config import get_settings
from .logger import setup_logging, get_logger
from .manager import pod_manager
from .models import (
    CheckPodRequest,
    CheckPodResponse,
    HealthResponse,
    InstallPodsRequest,
    OperationResponse,
    PodListResponse,
    RemovePodsRequest,
    RepositoryRequest,
    UpdatePodsRequest,
)

settings = get_settings()
setup_logging(log_level=settings.log_level, json_logs=settings.json_logs)
logger = get_logger(__name__)

app = FastAPI(
    title="pods",
    description="Manage source dependencies (pods) as git submodules",
)


def require_repository(repository: str) -> None:
    if not pod_manager.is_git_repository(repository):
        raise HTTPException(status_code=404, detail=f"not a git repository: {repository}")


def operation_result(success: bool, repository: str, operation: str) -> OperationResponse:
    if not success:
        raise HTTPException(status_code=409, detail=f"{operation} failed for {repository}")
    return OperationResponse(status="success", repository=repository, operation=operation)


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        git_available=shutil.which(pod_manager.settings.git_binary) is not None,
        sources=pod_manager.settings.sources,
    )


@app.get("/pods/installed", response_model=PodListResponse)
def installed_pods(repository: str = Query(..., min_length=1)) -> PodListResponse:
    require_repository(repository)
    pods = pod_manager.list_installed_pods(repository)
    return PodListResponse(pods=pods, count=len(pods))


@app.get("/pods/available", response_model=PodListResponse)
def available_pods(source: Optional[List[str]] = Query(default=None)) -> PodListResponse:
    pods = pod_manager.list_available_pods(source)
    return PodListResponse(pods=pods, count=len(pods))


@app.post("/pods/install", response_model=OperationResponse)
def install_pods(request: InstallPodsRequest) -> OperationResponse:
    require_repository(request.repository)
    if len(request.pods) == 1:
        success = pod_manager.install_pod(request.repository, request.pods[0])
    else:
        success = pod_manager.install_pods(request.repository, request.pods)
    return operation_result(success, request.repository, "install")


@app.post("/pods/remove", response_model=OperationResponse)
def remove_pods(request: RemovePodsRequest) -> OperationResponse:
    require_repository(request.repository)
    success = pod_manager.remove_pods(request.repository, request.names)
    return operation_result(success, request.repository, "remove")


@app.post("/pods/update", response_model=OperationResponse)
def update_pods(request: UpdatePodsRequest) -> OperationResponse:
    require_repository(request.repository)
    if request.names:
        success = pod_manager.update_pods(request.repository, request.names)
    else:
        success = pod_manager.update_all_pods(request.repository)
    return operation_result(success, request.repository, "update")


@app.post("/pods/check", response_model=CheckPodResponse)
def check_pod(request: CheckPodRequest) -> CheckPodResponse:
    valid = pod_manager.check_pod(request.repository, request.name)
    return CheckPodResponse(repository=request.repository, name=request.name, valid=valid)


@app.post("/projects", response_model=OperationResponse)
def create_project(request: RepositoryRequest) -> OperationResponse:
    success = pod_manager.create_project(request.repository)
    return operation_result(success, request.repository, "create_project")


@app.post("/projects/generate", response_model=OperationResponse)
def generate_build_files(request: RepositoryRequest) -> OperationResponse:
    require_repository(request.repository)
    success = pod_manager.generate_qmake_files(request.repository)
    return operation_result(success, request.repository, "generate")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.getenv("PODS_HOST", "127.0.0.1"), port=int(os.getenv("PODS_PORT", "8000")))
