import pytest

from app.client.orders import (
    NO_ADDRESS,
    NO_CLIENT,
    NO_NOTES,
    NO_REGION,
    NOT_RECORDED,
    OrderStatus,
    chip_color,
    filter_orders,
    is_forward_transition,
    label,
    next_status,
    normalize,
)


def test_normalize_in_progress_order() -> None:
    o = normalize({"id": 1, "estado": "EN PROCESO", "folio": 7})
    assert o.code == "7"
    assert o.status == OrderStatus.progress


@pytest.mark.parametrize(
    "estado,expected",
    [
        ("AGENDADO", OrderStatus.pending),
        ("EN PROCESO", OrderStatus.progress),
        ("REALIZADO", OrderStatus.done),
        ("CANCELADO", OrderStatus.pending),
        ("realizado", OrderStatus.pending),
        (None, OrderStatus.pending),
    ],
)
def test_server_status_mapping(estado, expected) -> None:
    assert normalize({"id": 1, "estado": estado}).status == expected


def test_missing_fields_get_placeholders() -> None:
    o = normalize({"id": 3})
    assert o.code == "-"
    assert o.client.name == NO_CLIENT
    assert o.company.name == NO_REGION
    assert o.address == NO_ADDRESS
    assert o.description == NO_NOTES
    assert o.hours == 0
    assert o.created_at == ""
    assert o.scheduled_at == NOT_RECORDED
    assert o.finished_at == NOT_RECORDED


def test_full_record() -> None:
    o = normalize({
        "id": 9,
        "folio": 1200,
        "estado": "REALIZADO",
        "cliente": "Juan Pérez",
        "region": {"id": 1, "nombre": "Norte"},
        "direccion": "Av. Reforma 100",
        "observaciones": "Limpieza profunda",
        "horasTrabajo": 3.5,
        "fechaRegistro": "2025-10-20T23:30:00-06:00",
        "fechaAgendada": "2025-10-21T09:00:00",
        "fechaFinalizado": "2025-10-21T12:15:00Z",
    })
    assert o.code == "1200"
    assert o.status == OrderStatus.done
    assert o.client.name == "Juan Pérez"
    assert o.company.name == "Norte"
    assert o.hours == 3.5
    # data de registro em UTC
    assert o.created_at == "2025-10-21"
    assert o.scheduled_at == "21/10/2025 09:00"
    assert o.finished_at == "21/10/2025 12:15"


def test_unparseable_dates_fall_back() -> None:
    o = normalize({"id": 1, "fechaRegistro": "ayer", "fechaAgendada": "pronto"})
    assert o.created_at == ""
    assert o.scheduled_at == NOT_RECORDED


def test_transition_chain() -> None:
    assert next_status(OrderStatus.pending) == OrderStatus.progress
    assert next_status(OrderStatus.progress) == OrderStatus.done
    assert next_status(OrderStatus.done) is None

    assert is_forward_transition(OrderStatus.pending, OrderStatus.progress)
    assert is_forward_transition(OrderStatus.progress, OrderStatus.done)
    assert not is_forward_transition(OrderStatus.pending, OrderStatus.done)
    assert not is_forward_transition(OrderStatus.progress, OrderStatus.pending)
    for target in OrderStatus:
        assert not is_forward_transition(OrderStatus.done, target)


def test_labels_and_colors() -> None:
    assert [label(s) for s in OrderStatus] == ["Pendiente", "En progreso", "Completada"]
    assert [chip_color(s) for s in OrderStatus] == ["warning", "tertiary", "success"]


@pytest.fixture
def sample():
    rows = [
        {"id": 1, "folio": 10, "estado": "REALIZADO", "cliente": "Juan Pérez"},
        {"id": 2, "folio": 11, "estado": "AGENDADO", "cliente": "JUANA Ruiz"},
        {"id": 3, "folio": 12, "estado": "REALIZADO", "cliente": "María López"},
        {"id": 4, "folio": 13, "estado": "REALIZADO", "cliente": "Pedro", "direccion": "Calle San Juan 4"},
        {"id": 5, "folio": 14, "estado": "EN PROCESO", "cliente": "Ana", "region": {"nombre": "Sur"}},
    ]
    return [normalize(r) for r in rows]


def test_filter_by_query_and_status(sample) -> None:
    result = filter_orders(sample, "juan", OrderStatus.done)
    assert [o.id for o in result] == [1, 4]
    assert all(o.status == OrderStatus.done for o in result)


def test_filter_query_is_trimmed_and_case_insensitive(sample) -> None:
    assert [o.id for o in filter_orders(sample, "  JUAN ")] == [1, 2, 4]


def test_filter_matches_code_and_company(sample) -> None:
    assert [o.id for o in filter_orders(sample, "12")] == [3]
    assert [o.id for o in filter_orders(sample, "sur")] == [5]


def test_empty_filter_returns_everything(sample) -> None:
    assert filter_orders(sample) == sample
    assert [o.id for o in filter_orders(sample, "", OrderStatus.pending)] == [2]
