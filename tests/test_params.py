from sqlinterp.params import BoundParameter, ParameterSet, ParamType, Ref, infer_type, normalize_key


def test_normalize_key() -> None:
    assert normalize_key('userId') == ':userId'
    assert normalize_key(':userId') == ':userId'
    assert normalize_key(1) == 1


def test_infer_type() -> None:
    assert infer_type(None) is ParamType.NULL
    assert infer_type(True) is ParamType.BOOL
    assert infer_type(10) is ParamType.INTEGER
    assert infer_type(b'data') is ParamType.LOB
    assert infer_type('10') is ParamType.STRING
    assert infer_type(1.5) is ParamType.STRING


def test_ref_value_is_resolved_on_access() -> None:
    ref = Ref(1)
    param = BoundParameter(':id', ref, ParamType.INTEGER)
    ref.value = 2
    assert param.value == 2
    assert param.marker == ':id'
    assert BoundParameter(1, 'boo').marker == '?'


def test_last_bind_wins() -> None:
    params = ParameterSet()
    params.bind(':status', 'active')
    params.bind('status', 'blocked')
    assert list(params) == [':status']
    assert params[':status'].value == 'blocked'


def test_ordered_names() -> None:
    params = ParameterSet()
    params.bind('logContent', 'content')
    params.bind(':log', 123, ParamType.INTEGER)
    assert [it.key for it in params.ordered()] == [':log', ':logContent']


def test_ordered_positions_are_numeric() -> None:
    params = ParameterSet()
    for pos in (10, 2, 1):
        params.bind(pos, pos, ParamType.INTEGER)
    assert [it.key for it in params.ordered()] == [1, 2, 10]


def test_ordered_mixed_keys() -> None:
    params = ParameterSet()
    params.bind('name', 'boo')
    params.bind(1, 10)
    assert [it.key for it in params.ordered()] == [1, ':name']


def test_from_input() -> None:
    assert ParameterSet.from_input(None) == {}
    assert ParameterSet.from_input([]) == {}

    params = ParameterSet.from_input([10, 'boo', None])
    assert [(it.key, it.value, it.datatype) for it in params.ordered()] == [
        (1, 10, ParamType.INTEGER),
        (2, 'boo', ParamType.STRING),
        (3, None, ParamType.NULL),
    ]

    params = ParameterSet.from_input({'id': 10, ':name': 'boo'})
    assert [(it.key, it.value) for it in params.ordered()] == [(':id', 10), (':name', 'boo')]
