# bikeflow/viz/widgets/map_wrap.py

# Widgets position themselves inside #map-wrap. Whichever script runs first
# creates it around the Leaflet container; `wrap` is null when there is no map.
ENSURE_MAP_WRAP_JS = """
  const mapEl = document.querySelector(".leaflet-container");
  let wrap = document.getElementById("map-wrap");
  if (!wrap && mapEl) {
    wrap = document.createElement("div");
    wrap.id = "map-wrap";
    mapEl.parentNode.insertBefore(wrap, mapEl);
    wrap.appendChild(mapEl);
  }
"""

MAP_WRAP_CSS = """
#map-wrap {
  position: relative;
  width: 100%;
}
#map-wrap .leaflet-container {
  width: 100% !important;
  height: 90vh !important;
  min-height: 520px;
}
"""
