from typing import Optional

from fastapi import FastAPI, Depends, Request
from fastapi.responses import Response
from fastapi.middleware.cors import CORSMiddleware

from common.errors import StyleError
from common.http import XML_MEDIA_TYPE, style_error_response
from common.logging import logger
from common.models import HealthStatus, ResolvedStyle, StyleQuery

from .pipeline import StylePipeline, build_pipeline


def get_pipeline(request: Request) -> StylePipeline:
    return request.app.state.pipeline


def create_app(pipeline: Optional[StylePipeline] = None) -> FastAPI:
    app = FastAPI(title="CSL Style Service")
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    async def load_styles():
        """Load the style registry; a failure here stops the service from starting."""
        if app.state.pipeline is None:
            app.state.pipeline = build_pipeline()
        logger.info(f"Style registry ready: {app.state.pipeline.registry.stats()}")

    @app.exception_handler(StyleError)
    async def handle_style_error(request: Request, exc: StyleError):
        logger.error(f"Style request failed ({exc.code}): {exc.message}")
        return style_error_response(exc)

    @app.get("/style")
    async def get_style(style: str, pipeline: StylePipeline = Depends(get_pipeline)):
        """Return the CSL XML for a style short name or URL"""
        result = await pipeline.run(style)
        return Response(content=result.csl_xml, media_type=XML_MEDIA_TYPE)

    @app.post("/style")
    async def post_style(query: StyleQuery, pipeline: StylePipeline = Depends(get_pipeline)):
        """Same as GET /style, but a posted styleXml is returned as is"""
        result = await pipeline.run(query.style, posted_style=query.style_xml)
        return Response(content=result.csl_xml, media_type=XML_MEDIA_TYPE)

    @app.get("/style/resolve", response_model=ResolvedStyle)
    async def resolve_style(style: str, full: bool = True,
                            pipeline: StylePipeline = Depends(get_pipeline)):
        result = await pipeline.resolve(style, full=full)
        identifier = result.identifier
        return ResolvedStyle(style=style, short_name=identifier.short_name,
                             host=identifier.host, url=identifier.url, hops=result.hops)

    @app.get("/health", response_model=HealthStatus)
    async def health_check(pipeline: StylePipeline = Depends(get_pipeline)):
        """Health check endpoint"""
        return HealthStatus(status="healthy", service="CSL Style Service",
                            registry=pipeline.registry.stats())

    return app


app = create_app()
