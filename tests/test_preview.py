import pytest
from bs4 import BeautifulSoup

from spiralcoil.coil import CoilSpec
from spiralcoil.layout import iter_layouts
from spiralcoil.preview import render_svg, layer_color, LAYER_COLORS

from .utils import tmpfile, print_on_error


def test_render(tmpfile):
    layouts = list(iter_layouts(CoilSpec(turns=2, layers=4, count=2)))
    svg = str(render_svg(layouts, margin=2))
    out = tmpfile('Preview', '.svg')
    out.write_text(svg)

    assert svg.startswith('<?xml')
    soup = BeautifulSoup(svg, features='xml')
    root = soup.find('svg')
    assert root['width'].endswith('mm')

    vias = sum(len(l.vias) for l in layouts)
    assert len(soup.find_all('circle')) == 2*vias

    # One group per layer and coil, plus one for each coil's vias
    groups = soup.find_all('g')
    assert len(groups) == 2*4 + 2
    assert soup.find('g', id='coil1-layer3') is not None

    # traces plus one path per stub
    stubs = sum(len(l.stubs) for l in layouts)
    assert len(soup.find_all('path')) == 2*4 + stubs

    front = soup.find('g', id='coil0-layer0').find('path')
    assert front['stroke'] == LAYER_COLORS['F.Cu']
    assert front['stroke-width'] == '0.250000'


def test_viewport_contains_coils():
    layouts = list(iter_layouts(CoilSpec(turns=2, center=(10, 20))))
    soup = BeautifulSoup(str(render_svg(layouts, margin=1)), features='xml')
    x, y, w, h = map(float, soup.find('svg')['viewBox'].split())
    r = layouts[0].outer_radius
    assert x == pytest.approx(10 - r - 1)
    assert y == pytest.approx(20 - r - 1)
    assert w == pytest.approx(2*r + 2)
    assert h == pytest.approx(2*r + 2)


def test_layer_colors():
    assert layer_color('F.Cu', 0) != layer_color('B.Cu', 3)
    assert layer_color('In1.Cu', 1) != layer_color('In2.Cu', 2)


def test_empty():
    with pytest.raises(ValueError):
        render_svg([])
