import folium

DEPARTURES_COLOR = "#4682b4"  # steelblue
ARRIVALS_COLOR = "#ff8c00"  # darkorange


def _hex_to_rgb(c):
    c = c.lstrip("#")
    return tuple(int(c[i:i + 2], 16) for i in (0, 2, 4))


def flow_color(ratio_bucket):
    """
    Mix departures/arrivals colours: 1.0 = all departures, 0.0 = all arrivals.
    """
    w = max(0.0, min(1.0, float(ratio_bucket)))
    dep = _hex_to_rgb(DEPARTURES_COLOR)
    arr = _hex_to_rgb(ARRIVALS_COLOR)
    rgb = [round(d * w + a * (1 - w)) for d, a in zip(dep, arr)]
    return "#{:02x}{:02x}{:02x}".format(*rgb)


def add_station_markers(m, stations, layer):
    """
    Draw one circle per station from the marker layer's current styles.
    Leaflet does its own projection, so only lat/lon are used here.
    """
    for s in stations:
        marker = layer.get(s.id)
        if marker is None:
            continue

        popup = [f"Station: {s.short_name}", marker.tooltip]
        if s.name:
            popup.insert(0, f"<b>{s.name}</b>")

        folium.CircleMarker(
            location=[float(s.lat), float(s.lon)],
            radius=marker.radius,
            fill=True,
            fill_color=flow_color(marker.ratio_bucket),
            fill_opacity=0.6,
            color="white",
            weight=1,
            opacity=0.8,
            tooltip=marker.tooltip,
            popup="<br>".join(popup),
        ).add_to(m)
