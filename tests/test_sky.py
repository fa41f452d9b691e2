from rideviz.core.sky import BLACK, DARK_BLUE, ORANGE, background_for_hour


def test_night_is_black():
    for h in (0, 3, 5, 20, 23):
        bg = background_for_hour(h)
        assert bg.color == BLACK
        assert not bg.is_gradient


def test_daytime_is_dark_blue():
    for h in (8, 12, 17):
        bg = background_for_hour(h)
        assert bg.color == DARK_BLUE
        assert not bg.is_gradient


def test_dawn_glow():
    bg = background_for_hour(7)
    assert bg.is_gradient
    assert bg.stops == [(0.0, ORANGE), (1.0, DARK_BLUE)]

    half = background_for_hour(6)
    assert half.is_gradient
    assert half.stops[0][1] not in (ORANGE, BLACK)


def test_dusk_glow():
    bg = background_for_hour(18)
    assert bg.is_gradient
    assert bg.stops == [(0.0, ORANGE), (1.0, DARK_BLUE)]

    late = background_for_hour(19)
    assert late.is_gradient
    assert late.stops[0][1] != ORANGE


def test_hour_may_be_a_string():
    assert background_for_hour("12") == background_for_hour(12)
