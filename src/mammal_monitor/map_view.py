# src/mammal_monitor/map_view.py
import math
from html import escape
from typing import List, Optional, Sequence

import folium

from .config import MARKER_STROKE, ALL_SPECIES_LABEL, MAP_DEFAULT_CENTER
from .geo_clustering import MapPoint, SpeciesSlice


def pie_marker_svg(slices: Sequence[SpeciesSlice], radius: float) -> str:
    """SVG pie with one wedge per species, sized 2*radius square."""
    size = radius * 2
    r = radius - 2
    total = sum(s.count for s in slices)
    paths = []
    angle = 0.0
    for s in slices:
        sweep = (s.count / total) * 2 * math.pi if total else 0.0
        x0 = radius + r * math.cos(angle - math.pi / 2)
        y0 = radius + r * math.sin(angle - math.pi / 2)
        x1 = radius + r * math.cos(angle + sweep - math.pi / 2)
        y1 = radius + r * math.sin(angle + sweep - math.pi / 2)
        large_arc = 1 if sweep > math.pi else 0
        paths.append(
            f'<path d="M {radius},{radius} L {x0:.3f},{y0:.3f} '
            f'A {r},{r} 0 {large_arc} 1 {x1:.3f},{y1:.3f} Z" '
            f'fill="{s.color}" opacity="0.9"/>'
        )
        angle += sweep
    return (
        f'<svg width="{size}" height="{size}" xmlns="http://www.w3.org/2000/svg">'
        f'{"".join(paths)}'
        f'<circle cx="{radius}" cy="{radius}" r="{r}" fill="none" stroke="#fff" stroke-width="2.5"/>'
        f'</svg>'
    )


def _coords_html(p: MapPoint) -> str:
    return (
        '<div style="margin-top:8px;padding-top:8px;border-top:1px solid #ddd;">'
        f"Lat: {p.lat:.4f}<br>Lng: {p.lng:.4f}</div>"
    )


def popup_html(p: MapPoint) -> str:
    if p.is_pie:
        rows = "".join(
            '<div style="display:flex;align-items:center;margin-top:4px;">'
            f'<div style="width:12px;height:12px;background:{s.color};margin-right:6px;border-radius:2px;"></div>'
            f"<span>{escape(s.species)}: {s.count}</span></div>"
            for s in p.species
        )
        return (
            '<div style="min-width:150px;"><b>Species at this location:</b><br>'
            f"{rows}<div style=\"margin-top:8px;\"><b>Total: {p.total_count}</b></div>"
            f"{_coords_html(p)}</div>"
        )
    head = p.species[0]
    label = head.species if p.show_colors else ALL_SPECIES_LABEL
    count = head.count if p.show_colors else p.total_count
    return (
        f'<div style="min-width:150px;"><b>{escape(label)}</b><br>'
        f"Detections: {count}{_coords_html(p)}</div>"
    )


def add_point(m: folium.Map, p: MapPoint) -> None:
    radius = p.radius
    popup = folium.Popup(popup_html(p), max_width=280)
    if p.is_pie:
        icon = folium.DivIcon(
            html=pie_marker_svg(p.species, radius),
            icon_size=(radius * 2, radius * 2),
            icon_anchor=(radius, radius),
            class_name="custom-pie-marker",
        )
        folium.Marker(location=[p.lat, p.lng], icon=icon, popup=popup).add_to(m)
        return
    folium.CircleMarker(
        location=[p.lat, p.lng],
        radius=radius,
        color=MARKER_STROKE,
        weight=2,
        opacity=0.8,
        fill=True,
        fill_color=p.species[0].color,
        fill_opacity=0.6,
        popup=popup,
    ).add_to(m)


def build_map(points: List[MapPoint], zoom_start: int = 7,
              center: Optional[Sequence[float]] = None) -> folium.Map:
    """Folium map centred on the first point with one marker per location."""
    if center is None:
        center = [points[0].lat, points[0].lng] if points else list(MAP_DEFAULT_CENTER)
    m = folium.Map(location=list(center), zoom_start=zoom_start, tiles="OpenStreetMap")
    for p in points:
        add_point(m, p)
    return m
