"""
SubnetMaze Renderer - HUD Text, Node Tables and SVG Snapshots

PURPOSE:
    Stand-in for the game's visual layer. Consumes the published node
    classification and the active line slots and turns them into text and a
    top-down SVG image. Nothing here decides reachability.

WHO READS ME:
    - main.py: prints the HUD / node table, writes SVG snapshots

WHO I READ:
    - simulation.py: Simulation, HudStatus
    - models.py: NodeState, SubnetMazeError

DEPENDENCIES:
    - jinja2: packaged templates (PackageLoader, templates/*.jinja2)
    - networkx: tree edges of the snapshot come from Topology.to_graph()
    - pathlib: output files

TEMPLATES:
    - hud.jinja2: LOCAL_IP / MASK_PREFIX / SUBNET_MASK lines
    - snapshot.svg.jinja2: tree edges, connectivity lines and nodes

COLOR SCHEME:
    - CURRENT: green
    - REACHABLE: cyan
    - UNREACHABLE: translucent dark grey
"""

import logging
from pathlib import Path

from jinja2 import (
    Environment,
    PackageLoader,
    Template,
    TemplateNotFound,
    select_autoescape,
)

from subnetmaze.models import NodeState, Point, SubnetMazeError
from subnetmaze.simulation import Simulation

_LOGGER = logging.getLogger(__name__)

NODE_COLORS = {
    NodeState.CURRENT: ("#00ff00", 1.0),
    NodeState.REACHABLE: ("#00ffff", 1.0),
    NodeState.UNREACHABLE: ("#333333", 0.3),
}

PIXELS_PER_UNIT = 12.0
MARGIN = 40.0


class Renderer:
    """renders the visible state of a simulation"""

    J2SUFFIX = ".jinja2"

    def __init__(self, sim: Simulation):
        self.sim = sim
        self.env = Environment(
            loader=PackageLoader("subnetmaze"), autoescape=select_autoescape()
        )

    def load_template(self, name: str) -> Template:
        """load a packaged template"""
        try:
            return self.env.get_template(f"{name}{Renderer.J2SUFFIX}")
        except TemplateNotFound as exc:
            raise SubnetMazeError(f"template does not exist: {name}") from exc

    def render_hud(self) -> str:
        return self.load_template("hud").render(status=self.sim.status())

    def node_rows(self) -> list[dict]:
        return [
            {
                "index": node.index,
                "address": node.address,
                "depth": node.depth,
                "state": self.sim.state_of(node).value,
            }
            for node in self.sim.store
        ]

    def render_table(self) -> str:
        """one line per node, indented by depth"""
        rows = self.node_rows()
        width = max(len(row["address"]) for row in rows)
        width += 2 * self.sim.store.topology.depth
        lines = [f"{'#':>3}  {'ADDRESS':<{width}}  DEPTH  STATE"]
        for row in rows:
            label = "  " * row["depth"] + row["address"]
            lines.append(
                f"{row['index']:>3}  {label:<{width}}  {row['depth']:>5}  {row['state']}"
            )
        return "\n".join(lines)

    def _projection(self):
        """top-down view: x to the right, z upwards"""
        positions = [node.position for node in self.sim.store]
        positions.append(self.sim.context.player)
        min_x = min(p.x for p in positions)
        max_x = max(p.x for p in positions)
        min_z = min(p.z for p in positions)
        max_z = max(p.z for p in positions)
        width = (max_x - min_x) * PIXELS_PER_UNIT + 2 * MARGIN
        height = (max_z - min_z) * PIXELS_PER_UNIT + 2 * MARGIN

        def project(point: Point) -> tuple[float, float]:
            return (
                round((point.x - min_x) * PIXELS_PER_UNIT + MARGIN, 2),
                round((max_z - point.z) * PIXELS_PER_UNIT + MARGIN, 2),
            )

        return round(width, 2), round(height, 2), project

    def render_svg(self) -> str:
        width, height, project = self._projection()
        graph = self.sim.store.topology.to_graph()

        edges = []
        for src, dst in graph.edges:
            x1, y1 = project(graph.nodes[src]["pos"])
            x2, y2 = project(graph.nodes[dst]["pos"])
            edges.append({"x1": x1, "y1": y1, "x2": x2, "y2": y2})

        lines = []
        for slot in self.sim.lines.active:
            x1, y1 = project(slot.start)
            x2, y2 = project(slot.end)
            lines.append(
                {"name": slot.name, "x1": x1, "y1": y1, "x2": x2, "y2": y2}
            )

        nodes = []
        for node in self.sim.store:
            x, y = project(node.position)
            color, opacity = NODE_COLORS[self.sim.state_of(node)]
            nodes.append(
                {
                    "address": node.address,
                    "x": x,
                    "y": y,
                    "r": round(0.5 * node.scale * PIXELS_PER_UNIT, 2),
                    "color": color,
                    "opacity": opacity,
                }
            )

        px, py = project(self.sim.context.player)
        return self.load_template("snapshot.svg").render(
            width=width,
            height=height,
            edges=edges,
            lines=lines,
            nodes=nodes,
            player={"x": px, "y": py},
            status=self.sim.status(),
        )

    @staticmethod
    def write(content: str, filename: str, overwrite: bool = False) -> Path:
        """write rendered output, refusing to replace files unless asked"""
        outfile = Path(filename)
        outfile.parent.mkdir(parents=True, exist_ok=True)
        if outfile.exists() and not overwrite:
            raise SubnetMazeError(
                f"Refusing to overwrite existing file: {outfile}. Use --overwrite to replace it."
            )
        if outfile.exists():
            _LOGGER.warning("Overwriting existing file %s", outfile)
        outfile.write_text(content, encoding="utf-8")
        _LOGGER.info("Snapshot written to %s", outfile)
        return outfile
