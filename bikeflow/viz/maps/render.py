# bikeflow/viz/maps/render.py
import json

import folium

from bikeflow.pipeline.viewport import CENTER_LAT, CENTER_LON, DEFAULT_ZOOM, MAX_ZOOM, MIN_ZOOM
from bikeflow.traffic.aggregate import hourly_trip_starts
from bikeflow.viz.overlays.stations import add_station_markers
from bikeflow.viz.widgets.legend import build_legend_widget
from bikeflow.viz.widgets.map_wrap import ENSURE_MAP_WRAP_JS, MAP_WRAP_CSS
from bikeflow.viz.widgets.time_slider import build_time_slider


def _title_element(title):
    return folium.Element(
        f"""
<style>
{MAP_WRAP_CSS}
#traffic-title {{
  position: absolute;
  top: 12px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 6px 14px;
  border-radius: 999px;
  font-size: 14px;
  font-weight: 600;
  z-index: 1300;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
{ENSURE_MAP_WRAP_JS}
  const title = {json.dumps(title)};
  if (!wrap || !title || document.getElementById("traffic-title")) return;

  const el = document.createElement("div");
  el.id = "traffic-title";
  el.textContent = title;
  wrap.appendChild(el);
}});
</script>
"""
    )


def render_map_document(pipeline, *, title: str | None = None):
    """
    Full Folium HTML document for the pipeline's current time filter:
    station circles, time slider, legend and an optional title.
    """
    m = folium.Map(
        location=[CENTER_LAT, CENTER_LON],
        zoom_start=DEFAULT_ZOOM,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles="cartodbpositron",
        prefer_canvas=False,
    )

    add_station_markers(m, pipeline.stations, pipeline.layer)

    root = m.get_root().html
    hourly = hourly_trip_starts(pipeline.trips) if pipeline.trips is not None else [0] * 24
    root.add_child(build_time_slider(pipeline.time_filter, hourly))
    root.add_child(build_legend_widget())
    root.add_child(_title_element(title))

    return m.get_root().render()
