import datetime
import logging

import matplotlib.pyplot as plt
import numpy as np

from flowlines import FlowField, LinesConfig, sample_flow_field, setup_logging
from flowlines.flowfields import Grid, circle_frame, random_potential_field, radial_field
from flowlines.flowfields.plotting import plot_flow_field, write_svg

WIDTH, HEIGHT = 1024, 1024

setup_logging(logging.INFO)
rng = np.random.default_rng()

pic = 0
for field_type in ("radial", "potential"):
    t1 = datetime.datetime.now()

    if field_type == "radial":
        field_function = radial_field(WIDTH, HEIGHT, curve_factor=rng.uniform(0.5, 3.0))
    else:
        pf = random_potential_field(Grid.covering(WIDTH, HEIGHT), core_radius=20.0, rng=rng)
        field_function = pf.field_function()

    lines_config = LinesConfig(
        max_count=int(rng.integers(100, 400)),
        min_thickness=2,
        max_thickness=12,
        segment_length=5,
    )
    flow_field = lines_config.initialize(FlowField(field_function), WIDTH, HEIGHT)
    sampler_config = lines_config.sampler_config(
        get_is_position_in_bounds=circle_frame(WIDTH, HEIGHT, 0.9),
        progress=True,
    )
    result = sample_flow_field(flow_field, sampler_config)

    t2 = datetime.datetime.now()
    print(f"it took {t2-t1} to place {result.line_count} lines for {pic}")

    write_svg(
        f"{pic}.svg",
        result.curves,
        WIDTH,
        HEIGHT,
        stroke_widths=[line.forward[0].width for line in result.lines],
        colors=[sampler_config.get_sample_step_color(line.forward[0]) for line in result.lines],
    )
    plot_flow_field(flow_field, lines=result.curves)
    plt.axis("off")
    plt.tight_layout()
    plt.savefig(f"{pic}.png")
    plt.close("all")
    pic += 1
