import pytest

from learning_map.expansion import ExpansionSet


def test_everything_starts_collapsed():
    expanded = ExpansionSet()

    assert not expanded.is_expanded('area-0')
    assert 'root' not in expanded
    assert len(expanded) == 0


@pytest.mark.parametrize('node_id', ['area-0', 'root', 'area-0-sub-1'])
def test_toggle_twice_restores_membership(node_id):
    expanded = ExpansionSet()

    assert expanded.toggle(node_id) is True
    assert expanded.is_expanded(node_id)
    assert expanded.toggle(node_id) is False
    assert not expanded.is_expanded(node_id)


def test_toggles_are_independent_per_id():
    expanded = ExpansionSet()
    expanded.toggle('a')
    expanded.toggle('b')
    expanded.toggle('a')

    assert not expanded.is_expanded('a')
    assert expanded.is_expanded('b')
    assert len(expanded) == 1


def test_clear_collapses_everything():
    expanded = ExpansionSet()
    for node_id in ['a', 'b', 'c']:
        expanded.toggle(node_id)

    expanded.clear()

    assert len(expanded) == 0
    assert not expanded.is_expanded('b')


def test_separate_sets_do_not_share_state():
    areas, subtopics = ExpansionSet(), ExpansionSet()
    areas.toggle('shared')

    assert areas.is_expanded('shared')
    assert not subtopics.is_expanded('shared')
