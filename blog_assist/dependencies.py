"""FastAPI dependencies resolving services from the application container."""

from typing import Annotated

from fastapi import Depends, Request

from blog_assist.services.container import ServiceContainer
from blog_assist.services.featured_image_generation import FeaturedImageGenerationService
from blog_assist.services.semantic_search import SemanticSearchService
from blog_assist.services.text_generation import TextGenerationService


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_text_generation(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> TextGenerationService:
    return services.text_generation


def get_image_generation(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> FeaturedImageGenerationService:
    return services.image_generation


def get_semantic_search(
    services: Annotated[ServiceContainer, Depends(get_services)],
) -> SemanticSearchService:
    return services.semantic_search


Services = Annotated[ServiceContainer, Depends(get_services)]
TextGeneration = Annotated[TextGenerationService, Depends(get_text_generation)]
ImageGeneration = Annotated[FeaturedImageGenerationService, Depends(get_image_generation)]
SemanticSearch = Annotated[SemanticSearchService, Depends(get_semantic_search)]
