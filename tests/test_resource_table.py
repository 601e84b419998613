import threading

from rich.console import Console
from rich.table import Table

from a1s import metrics
from a1s.model import TableModel
from a1s.model1 import ResEvent
from a1s.model1.color import ADD_STYLE, ERR_STYLE, MOD_STYLE
from a1s.ui import NO_MATCHES, NO_RESOURCES, ResourceTable, RichSurface
from tests._helpers import FakeLister, FakeRenderer, Obj


def _setup(items=None):
    lister = FakeLister(items if items is not None else [
        Obj("i-1", "web", "running", "2d"),
        Obj("i-2", "db", "stopped", "5h"),
        Obj("i-10", "Cache", "pending", "90m"),
    ])
    model = TableModel("ec2", lister=lister, renderer=FakeRenderer(), region="us-east-1")
    surface = RichSurface()
    table = ResourceTable("ec2", surface, model)
    return lister, model, surface, table


def _ids(surface):
    return [r.id for r in surface.rows]


def test_listener_delivery_renders_rows():
    _, model, surface, table = _setup()
    model.refresh()
    assert _ids(surface) == ["i-1", "i-2", "i-10"]
    assert surface.columns == ["ID", "NAME", "STATE", "AGE"]
    assert surface.title == " ec2(us-east-1)[3] "
    assert isinstance(surface.__rich__(), Table)


def test_filter_is_case_insensitive_any_field():
    _, model, surface, table = _setup()
    model.refresh()
    table.set_filter("CACHE")
    assert _ids(surface) == ["i-10"]
    table.set_filter("i-1")
    assert _ids(surface) == ["i-1", "i-10"]
    assert "Filter: i-1" in table.title()


def test_filter_round_trip_restores_full_view():
    _, model, surface, table = _setup()
    model.refresh()
    before = [re.row for re in table.view().row_events()]
    table.set_filter("db")
    assert table.view().row_count() == 1
    assert table.full_data().row_count() == 3
    table.set_filter("")
    assert [re.row for re in table.view().row_events()] == before
    table.set_filter("web")
    table.clear_filter()
    assert [re.row for re in table.view().row_events()] == before
    assert table.title() == " ec2(us-east-1)[3] "


def test_filter_without_matches():
    _, model, surface, table = _setup()
    model.refresh()
    table.set_filter("zzz")
    assert surface.message == NO_MATCHES
    assert table.view().empty()


def test_cycle_sort_by_column_name():
    _, model, surface, table = _setup()
    model.refresh()
    assert table.cycle_sort() == "ID"
    assert _ids(surface) == ["i-1", "i-2", "i-10"]
    assert table.cycle_sort() == "NAME"
    assert _ids(surface) == ["i-10", "i-2", "i-1"]  # "Cache" < "db" < "web"
    assert table.cycle_sort() == "STATE"
    assert table.cycle_sort() == "AGE"
    assert _ids(surface) == ["i-10", "i-2", "i-1"]  # 90m < 5h < 2d
    assert table.cycle_sort() == "ID"


def test_sort_direction_and_explicit_column():
    _, model, surface, table = _setup()
    model.refresh()
    table.set_sort_column("AGE", ascending=False)
    assert _ids(surface) == ["i-1", "i-2", "i-10"]
    table.toggle_sort_direction()
    assert table.sort_ascending
    assert _ids(surface) == ["i-10", "i-2", "i-1"]


def test_sort_survives_new_snapshot():
    lister, model, surface, table = _setup()
    model.refresh()
    table.set_sort_column("AGE")
    lister.items.append(Obj("i-4", "new", "running", "1s"))
    model.refresh()
    assert _ids(surface) == ["i-4", "i-10", "i-2", "i-1"]


def test_filter_and_sort_do_not_fetch():
    lister, model, surface, table = _setup()
    model.refresh()
    table.set_filter("web")
    table.cycle_sort()
    table.clear_filter()
    assert lister.calls == 1


def test_empty_listing_shows_no_resources():
    lister, model, surface, table = _setup()
    model.refresh()
    lister.items = []
    model.refresh()
    assert surface.message == NO_RESOURCES
    assert table.title() == " ec2(us-east-1)[0] "


def test_load_failure_keeps_last_good_rows():
    lister, model, surface, table = _setup()
    model.refresh()
    lister.error = RuntimeError("expired token")
    model.refresh()
    assert _ids(surface) == ["i-1", "i-2", "i-10"]
    assert table.title().startswith(" [Error]")
    lister.error = None
    model.refresh()
    assert not table.title().startswith(" [Error]")


def test_first_load_failure_shows_error_state():
    lister, model, surface, table = _setup()
    lister.error = RuntimeError("no credentials")
    model.refresh()
    assert surface.message.startswith("Error:")
    assert "no credentials" in surface.message
    assert surface.message != NO_RESOURCES


def test_row_and_cell_styles():
    lister, model, surface, table = _setup()
    model.refresh()
    first = surface.rows[0]
    assert first.style == ADD_STYLE
    assert first.cells[2].style == "green"  # running
    assert surface.rows[1].cells[2].style == ERR_STYLE  # stopped
    lister.items[0] = Obj("i-1", "web", "stopping", "2d")
    model.refresh()
    row = next(r for r in surface.rows if r.id == "i-1")
    assert row.style == MOD_STYLE
    assert row.cells[2].style == MOD_STYLE
    assert model.row_events().get("i-1").kind == ResEvent.UPDATE


def test_wide_and_hidden_columns():
    class WideRenderer(FakeRenderer):
        def header(self, region):
            from a1s.model1 import Header, col
            return Header([col("ID"), col("NAME"), col("STATE", wide=True), col("AGE", hide=True)])

    model = TableModel("ec2", lister=FakeLister([Obj("i-1", "web")]), renderer=WideRenderer())
    surface = RichSurface()
    table = ResourceTable("ec2", surface, model)
    model.refresh()
    assert surface.columns == ["ID", "NAME"]
    table.set_wide(True)
    assert surface.columns == ["ID", "NAME", "STATE"]
    assert surface.rows[0].cells[2].text == "running"


def test_column_decorator_applies_to_display_only():
    class DecoRenderer(FakeRenderer):
        def header(self, region):
            from a1s.model1 import Header, col
            return Header([col("ID"), col("NAME", decorator=lambda v: f"<{v}>"), col("STATE"), col("AGE", time=True)])

    model = TableModel("ec2", lister=FakeLister([Obj("i-1", "web"), Obj("i-2", "db")]), renderer=DecoRenderer())
    surface = RichSurface()
    table = ResourceTable("ec2", surface, model)
    model.refresh()
    assert [r.cells[1].text for r in surface.rows] == ["<web>", "<db>"]
    assert surface.rows[0].cells[2].text == "running"
    # filtering and the snapshot see the raw value
    table.set_filter("<")
    assert surface.message == NO_MATCHES
    table.set_filter("web")
    assert [r.cells[1].text for r in surface.rows] == ["<web>"]
    assert model.row_events().get("i-1").row.fields[1] == "web"


def test_marks():
    _, model, surface, table = _setup()
    model.refresh()
    assert table.toggle_mark("i-2") is True
    table.toggle_mark("i-1")
    assert table.is_marked("i-2")
    assert table.marked() == ["i-1", "i-2"]
    assert table.selected_ids() == table.marked()
    assert "reverse" in next(r for r in surface.rows if r.id == "i-2").style
    assert table.toggle_mark("i-2") is False
    table.clear_marks()
    assert table.marked() == []


def test_refresh_peeks_model():
    _, model, surface, table = _setup()
    model.refresh()
    model.remove_listener(table)
    surface.rows = []
    table.refresh()
    assert _ids(surface) == ["i-1", "i-2", "i-10"]


def test_set_model_moves_listener():
    _, model, surface, table = _setup()
    other = TableModel("s3", lister=FakeLister([Obj("b-1")]), renderer=FakeRenderer())
    table.set_model(other)
    model.refresh()
    assert surface.rows == []
    other.refresh()
    assert _ids(surface) == ["b-1"]


def test_overlapping_redraw_is_skipped():
    _, model, surface, table = _setup()
    model.refresh()
    skipped0 = metrics.sample("a1s_ui_render_skipped_total", {"resource": "ec2"})
    started, release = threading.Event(), threading.Event()
    real = surface.render

    def slow_render(*a, **kw):
        started.set()
        release.wait(2.0)
        real(*a, **kw)

    surface.render = slow_render
    t = threading.Thread(target=table.set_filter, args=("web",))
    t.start()
    assert started.wait(2.0)
    # second redraw while the first is still drawing: skipped, not blocked
    assert table.update_ui() is False
    release.set()
    t.join(2.0)
    assert _ids(surface) == ["i-1"]
    assert metrics.sample("a1s_ui_render_skipped_total", {"resource": "ec2"}) == skipped0 + 1


def test_rich_surface_prints():
    _, model, surface, table = _setup()
    model.refresh()
    console = Console(record=True, width=120)
    surface.print_to(console)
    out = console.export_text()
    assert "i-10" in out and "STATE" in out
