"""Page shell: generation form plus graph and card views of the installed map"""

import logging
import pathlib
from typing import Annotated, Literal
from urllib.parse import quote

from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from learning_map.controller import MapViewController
from learning_map.exceptions import (
    GenerationError,
    GenerationInProgressError,
    InputValidationError,
)
from learning_map.export import dump_export, export_filename
from learning_map.models import Level
from learning_map.views.graph import MAX_ZOOM, MIN_ZOOM, NODE_HEIGHT, NODE_WIDTH

logger = logging.getLogger(__name__)

here = pathlib.Path(__file__).parent.resolve()
templates = Jinja2Templates(directory=str(here / 'views' / 'templates'))

router = APIRouter(tags=['UI'])

View = Literal['graph', 'cards']

# Statuses the page passes through as-is; other generation failures become 502
PASSTHROUGH_STATUSES = {402, 429}


def get_controller(request: Request) -> MapViewController:
    return request.app.state.controller


def _render_page(
    request: Request,
    controller: MapViewController,
    *,
    view: View = 'graph',
    zoom: float = 1.0,
    pan_x: float = 0.0,
    pan_y: float = 0.0,
    topic: str = '',
    level: str = 'beginner',
    message: str | None = None,
    status_code: int = 200,
) -> Response:
    has_map = controller.learning_map is not None
    context = {
        'view': view,
        'topic': topic,
        'level': level,
        'message': message or controller.error,
        'is_loading': controller.is_loading,
        'learning_map': controller.learning_map,
        'cards': controller.cards() if has_map else None,
        'graph': controller.graph(zoom, pan_x, pan_y) if has_map else None,
        'node_width': NODE_WIDTH,
        'node_height': NODE_HEIGHT,
        'min_zoom': MIN_ZOOM,
        'max_zoom': MAX_ZOOM,
    }
    return templates.TemplateResponse(
        request, 'index.html.jinja', context, status_code=status_code
    )


def _back_to_page(request: Request, view: View, **params: float) -> RedirectResponse:
    url = request.url_for('index').include_query_params(view=view, **params)
    return RedirectResponse(url=str(url), status_code=303)


@router.get('/', name='index', include_in_schema=False)
async def index(
    request: Request,
    controller: Annotated[MapViewController, Depends(get_controller)],
    view: View = 'graph',
    zoom: float = 1.0,
    pan_x: float = 0.0,
    pan_y: float = 0.0,
):
    return _render_page(request, controller, view=view, zoom=zoom, pan_x=pan_x, pan_y=pan_y)


@router.post('/map', include_in_schema=False)
async def generate_map(
    request: Request,
    controller: Annotated[MapViewController, Depends(get_controller)],
    topic: Annotated[str, Form()] = '',
    level: Annotated[Level, Form()] = 'beginner',
    view: Annotated[View, Form()] = 'graph',
):
    """Generate a map from the form; failures re-render the page and keep the old map"""
    try:
        await controller.generate(topic, level)
    except InputValidationError as e:
        return _render_page(
            request, controller, view=view, topic=topic, level=level,
            message=e.message, status_code=400,
        )
    except GenerationInProgressError as e:
        return _render_page(
            request, controller, view=view, topic=topic, level=level,
            message=e.message, status_code=409,
        )
    except GenerationError as e:
        status_code = e.status_code if e.status_code in PASSTHROUGH_STATUSES else 502
        return _render_page(
            request, controller, view=view, topic=topic, level=level,
            message=e.message, status_code=status_code,
        )
    return _back_to_page(request, view)


@router.post('/map/areas/{area_id:path}/toggle', include_in_schema=False)
async def toggle_area(
    request: Request,
    area_id: str,
    controller: Annotated[MapViewController, Depends(get_controller)],
):
    controller.toggle_area(area_id)
    return _back_to_page(request, 'cards')


@router.post('/map/subtopics/{subtopic_id:path}/toggle', include_in_schema=False)
async def toggle_subtopic(
    request: Request,
    subtopic_id: str,
    controller: Annotated[MapViewController, Depends(get_controller)],
):
    controller.toggle_subtopic(subtopic_id)
    return _back_to_page(request, 'cards')


@router.post('/map/nodes/{node_id:path}/toggle', include_in_schema=False)
async def toggle_node(
    request: Request,
    node_id: str,
    controller: Annotated[MapViewController, Depends(get_controller)],
    zoom: float = 1.0,
    pan_x: float = 0.0,
    pan_y: float = 0.0,
):
    controller.toggle_node(node_id)
    return _back_to_page(request, 'graph', zoom=zoom, pan_x=pan_x, pan_y=pan_y)


@router.post('/map/reset', include_in_schema=False)
async def reset_map(
    request: Request,
    controller: Annotated[MapViewController, Depends(get_controller)],
):
    controller.reset()
    return _back_to_page(request, 'graph')


@router.get('/map/graph', summary='Graph view of the current map')
async def graph_view(
    controller: Annotated[MapViewController, Depends(get_controller)],
    zoom: float = 1.0,
    pan_x: float = 0.0,
    pan_y: float = 0.0,
):
    return controller.graph(zoom, pan_x, pan_y).model_dump()


@router.get('/map/export', summary='Download the current map as JSON')
async def export_map(controller: Annotated[MapViewController, Depends(get_controller)]):
    document = controller.export()
    filename = export_filename(document['topic'])
    return Response(
        content=dump_export(document),
        media_type='application/json',
        headers={'Content-Disposition': f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
