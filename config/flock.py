"""Configuration for the homing flock simulation."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Homing Flock"
}

CAMERA = {
    "fov": 40.0,
    "near_clip": 0.1,
    "far_clip": 1000.0,
    "position": (0.0, 0.0, 250.0),
    "target": (0.0, 0.0, 0.0),
}

LIGHTS = {
    "ambient": (0.6, 0.6, 0.6),        # 0x999999
    "sky": (1.0, 1.0, 0.8),            # 0xffffcc, hemisphere top
    "ground": (0.133, 0.133, 0.0),     # 0x222200, hemisphere bottom
    "sky_height": 15.0,
    "directional": (1.0, 1.0, 1.0),
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "text": (230, 230, 230)
}

FLOCK = {
    "num_a": 200,
    "num_b": 0,
    "update_order": "sequential",   # or "simultaneous"
}

STEERING = {
    "separation_radius": 40.0,
    "alignment_radius": 50.0,
    "cohesion_radius": 10.0,        # Only very tight clusters cohere
    "separation_weight": 0.015,     # Scaled by mass on the way in
    "alignment_weight": 0.05,
    "cohesion_weight": 0.01,
    "centering_weight": 0.0001,     # Scaled by distance from home and mass
    "alignment_speed_limit": 1.0,
}

GROUPS = {
    "A": {
        "mass": 1.0,
        "home": (0.0, 0.0, 0.0),
        "spawn_x": (80.0, 100.0),
        "spawn_y": (-10.0, 10.0),
        "spawn_z": (0.0, 0.0),
        "facing": "position",       # Outward along the radial direction
        "color": (0.2, 0.2, 0.2),   # 0x333333
    },
    "B": {
        "mass": 15.0,
        "home": (50.0, 0.0, 0.0),
        "spawn_x": (-100.0, -80.0),
        "spawn_y": (-10.0, 10.0),
        "spawn_z": (0.0, 0.0),
        "facing": "velocity",       # Heading-aligned
        "color": (0.067, 0.067, 0.2),  # 0x111133
    },
}

SPAWN_VELOCITY = {
    "x": (0.001, 0.001),
    "y": (-1.0, 1.0),
    "z": (-1.0, 1.0),
}

SHIPS = {
    "length": 1.0,
    "radius": 1.0,
    "offset": 2.0,                  # Nose sits ahead of the agent position
}
