"""Graph view: positioned nodes and edges with click-to-reveal details"""

from pydantic import BaseModel

from learning_map.expansion import ExpansionSet
from learning_map.layout import CATEGORY_COLORS, LayoutNode, MapLayout
from learning_map.models import Resource
from learning_map.views.cards import category_label, priority_badge

MIN_ZOOM = 0.2
MAX_ZOOM = 1.5

NODE_WIDTH = 260.0
NODE_HEIGHT = 80.0
VIEW_PADDING = 40.0

ROOT_BACKGROUND = 'hsl(var(--primary))'
SUB_BACKGROUND = 'hsl(var(--card))'
SUB_FOREGROUND = 'hsl(var(--card-foreground))'
NEUTRAL_MAIN_BACKGROUND = 'hsl(var(--accent))'


class Viewport(BaseModel):
    x: float
    y: float
    width: float
    height: float
    zoom: float

    @property
    def view_box(self) -> str:
        return f'{self.x:.1f} {self.y:.1f} {self.width:.1f} {self.height:.1f}'


class GraphNodeView(BaseModel):
    id: str
    x: float
    y: float
    level: str
    label: str
    background: str
    foreground: str
    category: str | None = None
    priority: str | None = None
    expanded: bool = False
    # Only filled while expanded
    description: str | None = None
    resources: list[Resource] = []


class GraphEdgeView(BaseModel):
    id: str
    source: str
    target: str
    x1: float
    y1: float
    x2: float
    y2: float
    stroke: str
    stroke_width: int
    animated: bool


class GraphView(BaseModel):
    nodes: list[GraphNodeView]
    edges: list[GraphEdgeView]
    viewport: Viewport


def clamp_zoom(zoom: float) -> float:
    return min(MAX_ZOOM, max(MIN_ZOOM, zoom))


def fit_view(
    nodes: list[LayoutNode], zoom: float = 1.0, pan_x: float = 0.0, pan_y: float = 0.0
) -> Viewport:
    """Viewport covering every node's footprint, scaled by `zoom` around its centre and shifted by the pan offsets"""
    zoom = clamp_zoom(zoom)
    if nodes:
        min_x = min(n.position.x for n in nodes) - VIEW_PADDING
        min_y = min(n.position.y for n in nodes) - VIEW_PADDING
        max_x = max(n.position.x for n in nodes) + NODE_WIDTH + VIEW_PADDING
        max_y = max(n.position.y for n in nodes) + NODE_HEIGHT + VIEW_PADDING
    else:
        min_x, min_y, max_x, max_y = 0.0, 0.0, NODE_WIDTH, NODE_HEIGHT

    width = (max_x - min_x) / zoom
    height = (max_y - min_y) / zoom
    center_x = (min_x + max_x) / 2
    center_y = (min_y + max_y) / 2
    return Viewport(
        x=center_x - width / 2 + pan_x,
        y=center_y - height / 2 + pan_y,
        width=width,
        height=height,
        zoom=zoom,
    )


def node_colors(node: LayoutNode) -> tuple[str, str]:
    """Background and text colour of a node"""
    match node.level:
        case 'root':
            return ROOT_BACKGROUND, 'white'
        case 'main':
            return CATEGORY_COLORS.get(node.data.category or '', NEUTRAL_MAIN_BACKGROUND), 'white'
        case _:
            return SUB_BACKGROUND, SUB_FOREGROUND


def _node_view(node: LayoutNode, expanded_nodes: ExpansionSet) -> GraphNodeView:
    background, foreground = node_colors(node)
    expanded = expanded_nodes.is_expanded(node.id)
    badge = priority_badge(node.data.priority)
    return GraphNodeView(
        id=node.id,
        x=node.position.x,
        y=node.position.y,
        level=node.level,
        label=node.data.label,
        background=background,
        foreground=foreground,
        category=category_label(node.data.category) if node.level == 'main' else None,
        priority=str(badge) if badge else None,
        expanded=expanded,
        description=node.data.description if expanded else None,
        resources=(node.data.resources or []) if expanded else [],
    )


def render_graph(
    layout: MapLayout,
    expanded_nodes: ExpansionSet,
    zoom: float = 1.0,
    pan_x: float = 0.0,
    pan_y: float = 0.0,
) -> GraphView:
    centers = {
        n.id: (n.position.x + NODE_WIDTH / 2, n.position.y + NODE_HEIGHT / 2)
        for n in layout.nodes
    }
    edges = [
        GraphEdgeView(
            id=e.id,
            source=e.source,
            target=e.target,
            x1=centers[e.source][0],
            y1=centers[e.source][1],
            x2=centers[e.target][0],
            y2=centers[e.target][1],
            stroke=e.style.stroke,
            stroke_width=e.style.stroke_width,
            animated=e.animated,
        )
        for e in layout.edges
        if e.source in centers and e.target in centers
    ]
    return GraphView(
        nodes=[_node_view(n, expanded_nodes) for n in layout.nodes],
        edges=edges,
        viewport=fit_view(layout.nodes, zoom, pan_x, pan_y),
    )
