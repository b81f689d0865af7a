from typing import List

from sqlinterp.markers import Marker, replace_marker, split_markers, substitute
from sqlinterp.params import BoundParameter


def markers(query: str) -> List[str]:
    return [it.text for it in split_markers(query) if isinstance(it, Marker)]


def test_split_markers() -> None:
    parts = split_markers('SELECT * FROM users WHERE id = ? AND name = :name')
    assert [str(it) for it in parts] == [
        'SELECT * FROM users WHERE id = ',
        '?',
        ' AND name = ',
        ':name',
    ]
    assert split_markers('') == []
    assert split_markers('SELECT 1') == ['SELECT 1']


def test_named_marker_takes_whole_identifier() -> None:
    assert markers('UPDATE logs SET logContent = :logContent WHERE log = :log') == [
        ':logContent',
        ':log',
    ]


def test_markers_inside_literals_are_skipped() -> None:
    assert markers("SELECT ':a', \"b?\", :a, ?") == [':a', '?']
    assert markers("SELECT 'it''s :a', :b") == [':b']


def test_backslash_does_not_escape_quotes() -> None:
    assert markers("WHERE p = 'C:\\' AND b = :b AND c = 'x'") == [':b']
    assert markers("SELECT '' , :a") == [':a']


def test_markers_inside_comments_are_skipped() -> None:
    assert markers('SELECT :a -- where :b = ?\n, ?') == [':a', '?']
    assert markers('SELECT /* :a\n? */ :b') == [':b']


def test_not_a_marker() -> None:
    assert markers('SELECT x::int, ?1, t.a:b, :1') == []


def test_replace_marker() -> None:
    parts = split_markers('SELECT ?, ?')
    assert replace_marker(parts, '?', '1')
    assert replace_marker(parts, '?', '2')
    assert not replace_marker(parts, '?', '3')
    assert not replace_marker(parts, ':name', '4')
    assert ''.join(map(str, parts)) == 'SELECT 1, 2'


def test_substituted_values_are_not_rescanned() -> None:
    params = [(BoundParameter(1, 'a?'), "'a?'"), (BoundParameter(2, 2), '2')]
    assert substitute('SELECT ?, ?', params) == "SELECT 'a?', 2"

    params = [(BoundParameter(':a', ':b'), ':b'), (BoundParameter(':b', 1), '1')]
    assert substitute('SELECT :a, :b', params) == 'SELECT :b, 1'


def test_unmatched_params_are_ignored() -> None:
    params = [(BoundParameter(':missing', 1), '1')]
    assert substitute('SELECT :id', params) == 'SELECT :id'
