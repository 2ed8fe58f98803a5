# bikeflow/viz/widgets/legend.py
import folium

from bikeflow.viz.overlays.stations import flow_color
from bikeflow.viz.widgets.map_wrap import ENSURE_MAP_WRAP_JS


def build_legend_widget():
    """
    Floating legend for the departure/arrival colour buckets.
    """
    rows = [
        (flow_color(1.0), "more departures"),
        (flow_color(0.5), "balanced"),
        (flow_color(0.0), "more arrivals"),
    ]
    items = "".join(
        f'<div><span style="color:{color}">●</span> {label}</div>' for color, label in rows
    )

    return folium.Element(
        f"""
<style>
#flow-legend {{
  position: absolute;
  bottom: 24px;
  left: 16px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  line-height: 1.5;
  z-index: 1200;
}}
</style>

<script>
document.addEventListener("DOMContentLoaded", () => {{
{ENSURE_MAP_WRAP_JS}
  if (!wrap || document.getElementById("flow-legend")) return;

  const legend = document.createElement("div");
  legend.id = "flow-legend";
  legend.innerHTML = '{items}';
  wrap.appendChild(legend);
}});
</script>
"""
    )
