"""FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from smogmap.enrichment import EnrichmentPipeline
from smogmap.shared import SharedInfrastructure
from smogmap_config import Settings


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_infrastructure(request: Request) -> SharedInfrastructure:
    return request.app.state.infra


def get_pipeline(
    infra: Annotated[SharedInfrastructure, Depends(get_infrastructure)],
) -> EnrichmentPipeline:
    return infra.pipeline


SettingsDep = Annotated[Settings, Depends(get_app_settings)]
PipelineDep = Annotated[EnrichmentPipeline, Depends(get_pipeline)]
