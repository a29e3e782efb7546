import logging

from learning_map.client import MapGenerationClient, validate_topic
from learning_map.exceptions import GenerationError, GenerationInProgressError, NoMapError
from learning_map.expansion import ExpansionSet
from learning_map.export import export_learning_map
from learning_map.layout import MapLayout, compute_layout
from learning_map.models import LearningMap
from learning_map.views.cards import MapCards, render_cards
from learning_map.views.graph import GraphView, render_graph

logger = logging.getLogger(__name__)


class MapViewController:
    """
    Owns everything the views show: the installed map, its layout and which
    nodes are expanded.

    The map is only ever replaced wholesale by a successful generation; a
    failed one leaves it untouched. Each generation takes a ticket and only the
    newest ticket may install its result, so a response arriving after a reset
    is dropped.
    """

    def __init__(self, client: MapGenerationClient):
        self._client = client
        self._generation = 0

        self.learning_map: LearningMap | None = None
        self.layout: MapLayout | None = None
        self.expanded_areas = ExpansionSet()
        self.expanded_subtopics = ExpansionSet()
        self.expanded_nodes = ExpansionSet()

        self.is_loading = False
        self.error: str | None = None

    async def generate(self, topic: str, level: str = 'beginner') -> LearningMap | None:
        """
        Request a new map and install it.

        Returns the installed map, or None for a stale result, successful or failed.
        Raises InputValidationError, GenerationInProgressError or GenerationError.
        """
        topic = validate_topic(topic)
        if self.is_loading:
            raise GenerationInProgressError()

        self._generation += 1
        ticket = self._generation
        self.is_loading = True
        self.error = None
        try:
            learning_map = await self._client.generate(topic, level)
        except GenerationError as e:
            if ticket != self._generation:
                logger.info(f'Discarding stale generation failure for {topic!r}: {e.message}')
                return None
            self.error = e.message
            raise
        finally:
            if ticket == self._generation:
                self.is_loading = False

        if ticket != self._generation:
            logger.info(f'Discarding stale learning map for {topic!r}')
            return None

        self.install(learning_map)
        return learning_map

    def install(self, learning_map: LearningMap) -> None:
        self.learning_map = learning_map
        self.layout = compute_layout(learning_map)
        self._clear_expansion()
        logger.info(
            f'Installed learning map {learning_map.topic!r}: '
            f'{len(self.layout.nodes)} nodes, {len(self.layout.edges)} edges'
        )

    def reset(self) -> None:
        self._generation += 1
        self.learning_map = None
        self.layout = None
        self.is_loading = False
        self.error = None
        self._clear_expansion()

    def _clear_expansion(self) -> None:
        self.expanded_areas.clear()
        self.expanded_subtopics.clear()
        self.expanded_nodes.clear()

    def toggle_area(self, area_id: str) -> bool:
        return self.expanded_areas.toggle(area_id)

    def toggle_subtopic(self, subtopic_id: str) -> bool:
        return self.expanded_subtopics.toggle(subtopic_id)

    def toggle_node(self, node_id: str) -> bool:
        return self.expanded_nodes.toggle(node_id)

    def _require_map(self) -> tuple[LearningMap, MapLayout]:
        if self.learning_map is None or self.layout is None:
            raise NoMapError()
        return self.learning_map, self.layout

    def cards(self) -> MapCards:
        learning_map, _ = self._require_map()
        return render_cards(learning_map, self.expanded_areas, self.expanded_subtopics)

    def graph(self, zoom: float = 1.0, pan_x: float = 0.0, pan_y: float = 0.0) -> GraphView:
        _, layout = self._require_map()
        return render_graph(layout, self.expanded_nodes, zoom, pan_x, pan_y)

    def export(self) -> dict:
        learning_map, layout = self._require_map()
        logger.info(f'Exporting learning map {learning_map.topic!r}')
        return export_learning_map(layout.nodes, learning_map)
