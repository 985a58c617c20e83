"""
SubnetMaze Main Entry Point - CLI Argument Parsing and Session Playback

PURPOSE:
    Entry point for the subnetmaze CLI. Generates a topology from the
    configuration (plus command line overrides), plays a scripted session of
    mask adjustments and moves against it and prints or writes the result.

WHO READS ME:
    - Users: via CLI command `subnetmaze` or `python -m subnetmaze`

WHO I READ:
    - config.py: Configuration loading and defaults
    - models.py: SubnetMazeError exception handling
    - simulation.py: Simulation
    - render.py: Renderer for HUD, node table and SVG
    - colorlog.py: Custom log formatting

DEPENDENCIES:
    - argparse: CLI argument parsing
    - enlighten: optional progress counter over ticks
    - logging: Application logging

STEPS:
    --step may be given several times, steps run in order:
    - +N / -N: narrow / widen the mask by N bits
    - mask:N: set the prefix length to N
    - goto:ADDRESS: request a move and tick until it completes
    - wait:N: run N ticks

FLOW:
    1. Parse CLI arguments (create_argparser)
    2. Load configuration from config.toml (or defaults), apply overrides
    3. Create the Simulation, play the steps, run --ticks extra ticks
    4. Print the HUD (and node table), optionally write an SVG snapshot
"""

import argparse
import logging
import os
import re
import sys
from dataclasses import dataclass

import enlighten

import subnetmaze
from subnetmaze.colorlog import CustomFormatter
from subnetmaze.config import Config
from subnetmaze.models import SubnetMazeError
from subnetmaze.render import Renderer
from subnetmaze.simulation import Simulation

_LOGGER = logging.getLogger(__name__)

MAX_TRANSIT_TICKS = 100_000
STEP_RE = re.compile(r"^(?:(?P<delta>[+-]\d+)|(?P<verb>mask|goto|wait):(?P<arg>\S+))$")


@dataclass(frozen=True)
class Step:
    """one scripted control input"""

    verb: str
    arg: str


def valid_step(value: str) -> Step:
    match = STEP_RE.match(value.strip())
    if match is None:
        raise argparse.ArgumentTypeError(
            f"invalid step {value}. Use +N, -N, mask:N, goto:ADDRESS or wait:N."
        )
    if match["delta"] is not None:
        return Step("adjust", match["delta"])
    if match["verb"] in ("mask", "wait") and not match["arg"].isdigit():
        raise argparse.ArgumentTypeError(f"invalid step {value}: {match['verb']} needs a number")
    return Step(match["verb"], match["arg"])


def positive_float(value):
    fvalue = float(value)
    if fvalue <= 0:
        raise argparse.ArgumentTypeError(f"invalid value {value}. Must be positive.")
    return fvalue


def create_argparser(parser_class=argparse.ArgumentParser):
    """create the argparser for subnetmaze"""
    parser = parser_class(
        prog=subnetmaze.__name__, description=subnetmaze.__description__
    )
    config_settings = parser.add_argument_group("configuration")

    config_settings.add_argument(
        "-c",
        "--config",
        dest="configfile",
        help="Use the configuration from this file, defaults to %(default)s",
        default="config.toml",
    )
    config_settings.add_argument(
        "-w",
        "--write",
        dest="writeconfig",
        action="store_true",
        help="Write the configuration (including overrides) to a file and exit",
        default=False,
    )
    config_settings.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {subnetmaze.__version__}"
    )
    config_settings.add_argument(
        "-l",
        "--loglevel",
        type=str,
        default=os.environ.get("LOG_LEVEL", "WARN"),
        help="DEBUG, INFO, WARN, ERROR, CRITICAL, defaults to %(default)s",
    )
    config_settings.add_argument(
        "-p",
        "--progress",
        action="store_true",
        help="show a progress bar",
    )

    topology = parser.add_argument_group("topology")
    topology.add_argument(
        "--depth", dest="max_depth", type=int, default=None, help="Tree depth below the root"
    )
    topology.add_argument(
        "--branching",
        dest="branching_factor",
        type=int,
        default=None,
        help="Children per node",
    )
    topology.add_argument(
        "--distance",
        dest="level_distance",
        type=positive_float,
        default=None,
        help="Distance between parent and child",
    )
    topology.add_argument(
        "--spread",
        dest="spread_angle",
        type=float,
        default=None,
        help="Fan-out angle of the children in degrees",
    )
    topology.add_argument(
        "--root", dest="root_address", type=str, default=None, help="Root node address"
    )
    topology.add_argument(
        "--mask", dest="mask_bits", type=int, default=None, help="Initial prefix length"
    )

    session = parser.add_argument_group("session")
    session.add_argument(
        "-s",
        "--step",
        dest="steps",
        action="append",
        type=valid_step,
        default=[],
        help="Control input to play: +N, -N, mask:N, goto:ADDRESS or wait:N (repeatable)",
    )
    session.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Extra ticks to run after all steps, default %(default)d",
    )
    session.add_argument(
        "--dt",
        type=positive_float,
        default=1 / 60,
        help="Seconds per tick, default %(default).4f",
    )

    output = parser.add_argument_group("output")
    output.add_argument(
        "--list",
        dest="listnodes",
        action="store_true",
        help="Print all nodes with their classification",
    )
    output.add_argument(
        "--svg",
        dest="svg_output",
        metavar="FILE",
        type=str,
        help="Write a top-down SVG snapshot to FILE",
    )
    output.add_argument(
        "--overwrite",
        dest="overwrite",
        action="store_true",
        default=False,
        help="Allow overwriting an existing output file",
    )
    return parser


def get_log_level(level_name: str) -> tuple[int, bool]:
    log_levels = {
        "CRITICAL": logging.CRITICAL,
        "ERROR": logging.ERROR,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "INFO": logging.INFO,
        "DEBUG": logging.DEBUG,
        "NOTSET": logging.NOTSET,
    }
    level_name = level_name.upper()
    if level_name in log_levels:
        return log_levels[level_name], False
    return logging.WARNING, True


def setup_logging(loglevel: str):
    """sets up the logging, takes the given loglevel and uses the custom,
    colorful log formatter
    """
    logging.basicConfig(level=logging.WARN)
    level, unknown_loglevel = get_log_level(loglevel)
    logging.root.setLevel(level)
    custom_formatter = CustomFormatter()
    for handler in logging.root.handlers:
        handler.setFormatter(custom_formatter)
    if unknown_loglevel:
        _LOGGER.warning("Unknown log level: %s", loglevel.upper())


def apply_overrides(cfg: Config, args: argparse.Namespace) -> Config:
    """command line values win over the configuration file"""
    for name in (
        "max_depth",
        "branching_factor",
        "level_distance",
        "spread_angle",
        "root_address",
        "mask_bits",
    ):
        value = getattr(args, name, None)
        if value is not None:
            setattr(cfg, name, value)
    return cfg


def play(sim: Simulation, steps: list[Step], extra_ticks: int, dt: float, ticks=None):
    """run the scripted steps against the simulation"""

    def tick():
        sim.tick(dt)
        if ticks is not None:
            ticks.update()

    for step in steps:
        if step.verb == "adjust":
            sim.adjust_mask(int(step.arg))
        elif step.verb == "mask":
            sim.set_mask(int(step.arg))
        elif step.verb == "wait":
            for _ in range(int(step.arg)):
                tick()
        else:  # step.verb == "goto"
            result = sim.goto(step.arg)
            if not result.accepted:
                _LOGGER.warning("move to %s rejected: %s", step.arg, result.value)
                continue
            for _ in range(MAX_TRANSIT_TICKS):
                if not sim.navigator.moving:
                    break
                tick()
            else:
                raise SubnetMazeError(f"move to {step.arg} did not complete")
    for _ in range(extra_ticks):
        tick()


def main(argv: list[str] | None = None):
    """main function, returns 0 on success, 1 otherwise"""
    parser = create_argparser()
    args = parser.parse_args(argv)
    setup_logging(args.loglevel)

    cfg = apply_overrides(Config.load(args.configfile), args)
    if args.writeconfig:
        cfg.save(args.configfile)
        return 0

    manager = None
    ticks = None
    try:
        sim = Simulation(cfg)
        if args.progress:
            manager = enlighten.get_manager()
            ticks = manager.counter(desc="Simulation", unit="ticks", color="cyan", leave=False)
        play(sim, args.steps, args.ticks, args.dt, ticks)

        renderer = Renderer(sim)
        print(renderer.render_hud())
        if args.listnodes:
            print(renderer.render_table())
        if args.svg_output:
            renderer.write(renderer.render_svg(), args.svg_output, args.overwrite)
        retval = 0
    except SubnetMazeError as exc:
        _LOGGER.error(exc)
        retval = 1
    finally:
        if ticks is not None:
            ticks.close()  # type: ignore
        if manager is not None:
            manager.stop()  # type: ignore
    return retval


if __name__ == "__main__":
    sys.exit(main())
