"""
FastAPI dependencies.

The engine and catalog live on app.state; create_app() puts them there.
"""

from typing import Annotated

from fastapi import Depends, Request

from pathway.engines.progression.engine import ProgressionEngine
from pathway.pedagogy.catalog import Catalog


def get_engine(request: Request) -> ProgressionEngine:
    return request.app.state.engine


def get_catalog(request: Request) -> Catalog:
    return request.app.state.catalog


Engine = Annotated[ProgressionEngine, Depends(get_engine)]
CatalogDep = Annotated[Catalog, Depends(get_catalog)]
