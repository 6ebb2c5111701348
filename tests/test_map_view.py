import folium

from mammal_monitor.geo_clustering import cluster_points, SpeciesSlice
from mammal_monitor.map_view import pie_marker_svg, popup_html, build_map


def test_pie_svg_has_one_wedge_per_species():
    svg = pie_marker_svg([SpeciesSlice("Deer", 5, "#e41a1c"), SpeciesSlice("Fox", 1, "#377eb8")], 12)
    assert svg.count("<path") == 2
    assert 'width="24"' in svg
    assert "#e41a1c" in svg and "#377eb8" in svg


def test_large_wedge_uses_large_arc_flag():
    svg = pie_marker_svg([SpeciesSlice("Deer", 3, "#111111"), SpeciesSlice("Fox", 1, "#222222")], 10)
    assert " 0 1 1 " in svg


def test_popups(dated):
    pie = cluster_points(dated, show_colors=True)[0]
    html = popup_html(pie)
    assert "Species at this location" in html
    assert "Deer: 5" in html
    assert "Total: 6" in html

    agg = cluster_points(dated, show_colors=False)[0]
    assert "All Species" in popup_html(agg)
    assert "Detections: 6" in popup_html(agg)


def test_build_map_adds_one_marker_per_point(dated):
    points = cluster_points(dated, show_colors=True)
    m = build_map(points)
    markers = [c for c in m._children.values()
               if isinstance(c, (folium.Marker, folium.CircleMarker))]
    assert len(markers) == len(points)
    assert m.location == [points[0].lat, points[0].lng]


def test_build_map_without_points():
    m = build_map([])
    assert isinstance(m, folium.Map)
