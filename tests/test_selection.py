from climatehealth.selection import (
    ACTIVE_STYLE,
    DEFAULT_STYLE,
    HOVER_STYLE,
    DashboardState,
    NoneSelected,
    RegionSelection,
    Selected,
)

BRETAGNE_BOUNDS = ((47.3, -5.1), (48.9, -1.0))
CORSE_BOUNDS = ((41.3, 8.5), (43.0, 9.6))


def test_initial_state_is_overview():
    sel = RegionSelection()

    assert sel.state == NoneSelected()
    assert sel.selected is None
    assert not sel.panel_visible
    assert sel.viewport.center == (46.603354, 1.888334)
    assert sel.viewport.zoom == 6


def test_click_selects_and_fits_region():
    sel = RegionSelection()

    ticket = sel.click("Bretagne", 48.1, -2.7, BRETAGNE_BOUNDS)

    assert sel.state == Selected("Bretagne")
    assert sel.viewport.bounds == BRETAGNE_BOUNDS
    assert sel.viewport.padding == (50, 50)
    assert (ticket.region, ticket.lat, ticket.lon) == ("Bretagne", 48.1, -2.7)
    assert sel.is_current(ticket)


def test_selection_is_exclusive():
    sel = RegionSelection()
    sel.click("Bretagne", 48.1, -2.7, BRETAGNE_BOUNDS)

    sel.click("Corse", 42.1, 9.0, CORSE_BOUNDS)

    assert sel.state == Selected("Corse")
    assert sel.style_for("Corse") == ACTIVE_STYLE
    assert sel.style_for("Bretagne") == DEFAULT_STYLE
    assert sel.viewport.bounds == CORSE_BOUNDS


def test_close_always_returns_to_none_selected():
    sel = RegionSelection(center=(10.0, 20.0), zoom=4)
    sel.close()
    assert sel.state == NoneSelected()

    sel.click("Bretagne", 48.1, -2.7, BRETAGNE_BOUNDS)
    sel.show_panel()
    sel.close()

    assert sel.state == NoneSelected()
    assert not sel.panel_visible
    assert sel.viewport.bounds is None
    assert (sel.viewport.center, sel.viewport.zoom) == ((10.0, 20.0), 4)
    assert sel.style_for("Bretagne") == DEFAULT_STYLE


def test_reselecting_same_region_invalidates_older_ticket():
    sel = RegionSelection()
    first = sel.click("Bretagne", 48.1, -2.7)
    second = sel.click("Bretagne", 48.2, -2.6)

    assert not sel.is_current(first)
    assert sel.is_current(second)


def test_close_invalidates_pending_ticket():
    sel = RegionSelection()
    ticket = sel.click("Bretagne", 48.1, -2.7)
    sel.close()

    assert not sel.is_current(ticket)

    # a later selection of the same region does not revive it
    sel.click("Bretagne", 48.1, -2.7)
    assert not sel.is_current(ticket)


def test_hover_never_changes_selection():
    sel = RegionSelection()
    sel.click("Corse", 42.1, 9.0)

    assert sel.hover_style("Bretagne") == HOVER_STYLE
    assert sel.hover_style("Corse") is None
    assert sel.state == Selected("Corse")


def test_styles_are_copies():
    sel = RegionSelection()
    sel.style_for("Bretagne")["weight"] = 99
    assert sel.style_for("Bretagne")["weight"] == DEFAULT_STYLE["weight"] == 1


def test_dashboard_state_tracks_new_clicks():
    state = DashboardState()
    assert state.is_new_click(48.1, -2.7)

    state.last_click = (48.1, -2.7)
    assert not state.is_new_click(48.1, -2.7)
    assert state.is_new_click(48.1, -2.8)


def test_close_resets_click_memory_and_remounts_map():
    state = DashboardState()
    state.selection.click("Bretagne", 48.1, -2.7)
    state.last_click = (48.1, -2.7)
    state.error = "offline"
    key_before = state.map_key

    state.close()

    assert state.selection.state == NoneSelected()
    assert state.error is None
    assert state.map_key != key_before
    # the same point can be selected again after closing
    assert state.is_new_click(48.1, -2.7)
