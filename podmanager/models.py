"""
Pydantic models for pods and for the HTTP request/response schemas.
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class Pod(BaseModel):
    """A third-party source dependency tracked as a git submodule."""
    name: str = Field(default="", description="Pod name, also its submodule path in the repository")
    url: str = Field(default="", description="Clone URL of the pod")
    author: str = ""
    description: str = ""
    license: str = ""
    website: str = ""


class RepositoryRequest(BaseModel):
    """Request naming a repository"""
    repository: str = Field(..., min_length=1, description="Path of the repository on the server")


class InstallPodsRequest(RepositoryRequest):
    """Request to install one or more pods"""
    pods: List[Pod] = Field(..., min_length=1)


class RemovePodsRequest(RepositoryRequest):
    """Request to remove one or more pods"""
    names: List[str] = Field(..., min_length=1)


class UpdatePodsRequest(RepositoryRequest):
    """Request to update pods; no names means every installed pod"""
    names: Optional[List[str]] = Field(default=None)


class CheckPodRequest(RepositoryRequest):
    """Request to validate a pod layout"""
    name: str = Field(..., min_length=1)


class OperationResponse(BaseModel):
    """Outcome of a pod operation"""
    status: str
    repository: str
    operation: str


class CheckPodResponse(BaseModel):
    """Outcome of a pod layout check"""
    repository: str
    name: str
    valid: bool


class PodListResponse(BaseModel):
    """A list of pods"""
    pods: List[Pod]
    count: int


class HealthResponse(BaseModel):
    """Response model for health check"""
    status: str
    git_available: bool
    sources: List[str]
