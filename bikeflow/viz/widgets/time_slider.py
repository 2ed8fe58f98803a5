# bikeflow/viz/widgets/time_slider.py
import folium

from bikeflow.traffic.time_filter import format_time
from bikeflow.traffic.types import MINUTES_PER_DAY, NO_FILTER
from bikeflow.viz.widgets.map_wrap import ENSURE_MAP_WRAP_JS


def build_time_slider(time_filter, hourly_starts):
    """
    Time filter control:
      - slider from -1 ("any time") to 1439 minutes after midnight
      - bars = trip starts per hour; clicking one jumps to that hour
    Changing the value reloads the page with ?time=<minutes>.
    """
    max_count = max(hourly_starts, default=0)

    window_hours = set()
    if time_filter != NO_FILTER:
        window_hours = {h for h in range(24) if abs(h * 60 + 30 - time_filter) <= 90}

    bars = []
    for hour, count in enumerate(hourly_starts):
        height = int((count / max_count) * 48) if max_count > 0 else 0
        bars.append(
            f"""
            <div class="slider-bar-item"
                 onclick="setTimeFilter({hour * 60})"
                 title="{format_time(hour * 60)}: {count:,} trip starts">
              <div class="slider-bar"
                   style="height:{height}px; opacity:{'1.0' if hour in window_hours else '0.45'};">
              </div>
            </div>
            """
        )

    if time_filter == NO_FILTER:
        selected_label = ""
        any_display = "block"
        selected_display = "none"
    else:
        selected_label = format_time(time_filter)
        any_display = "none"
        selected_display = "block"

    return folium.Element(
        f"""
<style>
#time-filter {{
  position: absolute;
  top: 12px;
  right: 16px;
  width: 320px;
  background: rgba(255,255,255,0.95);
  padding: 8px 12px;
  border-radius: 10px;
  font-size: 12px;
  z-index: 1300;
}}

#time-filter label {{
  display: flex;
  gap: 8px;
  align-items: baseline;
}}

#time-slider {{
  flex: 1;
}}

#selected-time, #any-time-label {{
  white-space: nowrap;
}}

#any-time-label {{
  color: #666;
  font-style: italic;
}}

#slider-bars {{
  display: flex;
  align-items: flex-end;
  height: 50px;
  margin-top: 6px;
}}

.slider-bar-item {{
  flex: 1;
  display: flex;
  align-items: flex-end;
  height: 50px;
  margin-right: 1px;
  cursor: pointer;
}}

.slider-bar {{
  width: 100%;
  background: #4682b4;
  border-radius: 2px;
}}
</style>

<div id="time-filter">
  <label>
    Filter by time:
    <input id="time-slider" type="range" min="{NO_FILTER}" max="{MINUTES_PER_DAY - 1}" value="{time_filter}">
    <time id="selected-time" style="display:{selected_display}">{selected_label}</time>
    <em id="any-time-label" style="display:{any_display}">(any time)</em>
  </label>
  <div id="slider-bars">
    {''.join(bars)}
  </div>
</div>

<script>
function formatTime(minutes) {{
  const date = new Date(0, 0, 0, 0, minutes);
  return date.toLocaleString("en-US", {{ timeStyle: "short" }});
}}

function setTimeFilter(t) {{
  const url = new URL(window.location.href);
  url.searchParams.set("time", String(t));
  window.location.href = url.toString();
}}

document.addEventListener("DOMContentLoaded", () => {{
{ENSURE_MAP_WRAP_JS}
  const panel = document.getElementById("time-filter");
  if (wrap && panel) wrap.appendChild(panel);

  const slider = document.getElementById("time-slider");
  const selected = document.getElementById("selected-time");
  const anyTime = document.getElementById("any-time-label");
  if (!slider) return;

  slider.addEventListener("input", () => {{
    const t = Number(slider.value);
    if (t === {NO_FILTER}) {{
      selected.style.display = "none";
      anyTime.style.display = "block";
    }} else {{
      selected.textContent = formatTime(t);
      selected.style.display = "block";
      anyTime.style.display = "none";
    }}
  }});

  slider.addEventListener("change", () => setTimeFilter(Number(slider.value)));
}});
</script>
"""
    )
