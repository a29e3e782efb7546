import math

import pytest

from learning_map.layout import (
    FAN_TIGHTNESS,
    MAIN_RADIUS,
    NEUTRAL_STROKE,
    RING_CENTER,
    ROOT_POSITION,
    ROOT_STROKE,
    SUB_RADIUS,
    compute_layout,
    main_area_angles,
    subtopic_angles,
)
from learning_map.models import LearningMap
from tests.helpers import make_map_payload


def _layout(areas: int, subtopics: int, **kwargs):
    return compute_layout(LearningMap.model_validate(make_map_payload(areas, subtopics, **kwargs)))


@pytest.mark.parametrize('count', [1, 2, 5, 7, 12])
def test_main_area_angles_are_evenly_spaced_from_top(count):
    angles = main_area_angles(count)

    assert len(angles) == count
    assert angles[0] == pytest.approx(-math.pi / 2)
    for previous, current in zip(angles, angles[1:]):
        assert current - previous == pytest.approx(2 * math.pi / count)


def test_no_main_areas_gives_no_angles():
    assert main_area_angles(0) == []


def test_subtopic_angles_fan_formula():
    theta = 0.3
    angles = subtopic_angles(theta, 4)

    step = math.pi / 5
    assert angles == pytest.approx([theta + (j - 2) * step * FAN_TIGHTNESS for j in range(4)])


def test_empty_map_is_just_the_root():
    layout = _layout(0, 0)

    assert [n.id for n in layout.nodes] == ['root']
    assert layout.edges == []
    assert (layout.nodes[0].position.x, layout.nodes[0].position.y) == ROOT_POSITION
    assert layout.nodes[0].level == 'root'


def test_gardening_scenario_counts():
    layout = _layout(5, 3)

    assert len(layout.nodes) == 1 + 5 + 15
    assert len(layout.edges) == 5 + 15


def test_area_without_subtopics_gets_no_children():
    layout = _layout(3, 0)

    assert len(layout.nodes) == 4
    assert [e.id for e in layout.edges] == ['root-area-0', 'root-area-1', 'root-area-2']


@pytest.mark.parametrize('subtopics', [1, 3, 5])
def test_subtopic_nodes_and_edges_per_area(subtopics):
    layout = _layout(2, subtopics)

    for i in range(2):
        area_id = f'area-{i}'
        sub_edges = [e for e in layout.edges if e.source == area_id]
        assert len(sub_edges) == subtopics
        assert [e.id for e in sub_edges] == [f'{area_id}-{e.target}' for e in sub_edges]
        assert len({e.id for e in sub_edges}) == subtopics

        sub_nodes = [n for n in layout.nodes if n.id.startswith(f'{area_id}-sub-')]
        assert len(sub_nodes) == subtopics
        assert all(n.level == 'sub' for n in sub_nodes)


def test_edges_point_from_parent_to_child():
    layout = _layout(2, 2)

    root_edges = [e for e in layout.edges if e.source == 'root']
    assert [e.target for e in root_edges] == ['area-0', 'area-1']
    assert all(e.animated for e in root_edges)
    assert {e.target for e in layout.edges if e.source == 'area-1'} == {
        'area-1-sub-0',
        'area-1-sub-1',
    }


def test_single_area_sits_straight_above_ring_center():
    layout = _layout(1, 0)
    area = layout.nodes[1]

    assert area.position.x == pytest.approx(RING_CENTER[0])
    assert area.position.y == pytest.approx(RING_CENTER[1] - MAIN_RADIUS)


def test_subtopics_are_at_sub_radius_from_their_area():
    layout = _layout(4, 3)
    positions = {n.id: n.position for n in layout.nodes}

    for edge in layout.edges:
        if edge.source == 'root':
            continue
        parent, child = positions[edge.source], positions[edge.target]
        assert math.dist((parent.x, parent.y), (child.x, child.y)) == pytest.approx(SUB_RADIUS)


def test_layout_is_deterministic(learning_map):
    first = compute_layout(learning_map)
    second = compute_layout(learning_map)

    assert first.model_dump_json() == second.model_dump_json()


def test_node_data_copies_display_fields(learning_map):
    layout = compute_layout(learning_map)
    area_node = layout.nodes[1]
    area = learning_map.main_areas[0]

    assert area_node.id == area.id
    assert area_node.data.label == area.title
    assert area_node.data.category == area.category
    assert area_node.data.resources == area.resources
    assert area_node.data.resources[0] is not area.resources[0]
    assert layout.nodes[0].data.label == 'Gardening'


def test_edge_styles_follow_category_and_priority(learning_map):
    layout = compute_layout(learning_map)
    edges = {e.id: e for e in layout.edges}

    assert edges['root-area-0'].style.stroke == 'hsl(210 100% 45%)'
    essential = edges['area-0-area-0-sub-0']
    optional = edges['area-0-area-0-sub-2']
    assert (essential.style.stroke, essential.style.stroke_width) == ('hsl(0 84% 60%)', 2)
    assert (optional.style.stroke, optional.style.stroke_width) == ('hsl(142 76% 36%)', 1)


def test_missing_category_and_priority_fall_back_to_neutral_style():
    layout = _layout(2, 2, rich=False)

    for edge in layout.edges:
        if edge.source == 'root':
            assert edge.style.stroke == ROOT_STROKE
        else:
            assert edge.style.stroke == NEUTRAL_STROKE
            assert edge.style.stroke_width == 1


def test_edge_style_serializes_with_camel_case_width(learning_map):
    edge = compute_layout(learning_map).edges[0]

    assert edge.style.model_dump(by_alias=True) == {'stroke': edge.style.stroke, 'strokeWidth': 2}
