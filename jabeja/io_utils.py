import csv
import io
import os
from typing import IO, List, Tuple, Union

import networkx as nx
import pandas as pd

from .models import AnnealingPolicy, Config, RoundMetrics

TextOrPath = Union[str, os.PathLike, IO]

DELIMITER = "\t\t"
REPORT_HEADER = (
    "# Migration is number of nodes that have changed color."
    "\n\nRound" + DELIMITER + "Edge-Cut" + DELIMITER + "Swaps" + DELIMITER
    + "Migrations" + DELIMITER + "Skipped" + "\n"
)
REPORT_COLUMNS = ["round", "edge_cut", "swaps", "migrations"]


def _open_text(src: TextOrPath):
    """Return a text-mode file handle and a flag indicating whether to close it.

    Accepts a filesystem path, a text IO object, or a BytesIO buffer.
    """
    if isinstance(src, (str, os.PathLike)):
        f = open(src, 'r', newline='')
        return f, True
    if isinstance(src, io.BytesIO):
        src.seek(0)
        f = io.TextIOWrapper(src, encoding='utf-8', newline='')
        return f, True
    if hasattr(src, 'read'):
        if hasattr(src, 'seek'):
            src.seek(0)
        return src, False
    raise TypeError("Unsupported input type; expected path or file-like object")


def _parse_metis_header(line: str, lineno: int):
    parts = line.split()
    if len(parts) < 2:
        raise ValueError(f"line {lineno}: METIS header needs '<nodes> <edges> [fmt [ncon]]'")
    try:
        n, m = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"line {lineno}: non-integer METIS header {line!r}") from None
    fmt = parts[2].zfill(3) if len(parts) >= 3 else "000"
    ncon = int(parts[3]) if len(parts) >= 4 else 1
    has_vsize = fmt[0] == "1"
    has_vweights = fmt[1] == "1"
    has_eweights = fmt[2] == "1"
    return n, m, has_vsize, (ncon if has_vweights else 0), has_eweights


def load_metis_graph(src: TextOrPath) -> nx.Graph:
    """Read an undirected graph in METIS adjacency format.

    Vertex ids are 1-based and kept as-is. Lines starting with '%' are
    comments; after the header every line (an empty one included) is the
    adjacency list of the next vertex. Vertex sizes and weights are skipped.
    """
    G = nx.Graph()
    f, should_close = _open_text(src)
    try:
        header = None
        vertex = 0
        for lineno, raw in enumerate(f, start=1):
            line = raw.strip()
            if line.startswith('%'):
                continue
            if header is None:
                if not line:
                    continue
                header = _parse_metis_header(line, lineno)
                n = header[0]
                G.add_nodes_from(range(1, n + 1))
                continue
            n, _, has_vsize, skip_weights, has_eweights = header
            vertex += 1
            if vertex > n:
                if line:
                    raise ValueError(f"line {lineno}: more vertex lines than the {n} declared")
                continue
            try:
                values = [int(tok) for tok in line.split()]
            except ValueError:
                raise ValueError(f"line {lineno}: non-integer adjacency entry") from None
            values = values[int(has_vsize) + skip_weights:]
            neighbours = values[::2] if has_eweights else values
            for v in neighbours:
                if v < 1 or v > n:
                    raise ValueError(f"line {lineno}: neighbour {v} outside 1..{n}")
                if v != vertex:
                    G.add_edge(vertex, v)
    finally:
        if should_close:
            f.close()
    if header is None:
        raise ValueError("empty METIS file")
    if vertex < header[0]:
        raise ValueError(f"expected {header[0]} vertex lines, found {vertex}")
    return G


def load_edge_list_csv(src: TextOrPath) -> List[Tuple[int, int]]:
    edges: List[Tuple[int, int]] = []
    f, should_close = _open_text(src)
    try:
        reader = csv.reader(f)
        for row in reader:
            if not row or row[0].strip().startswith('#'):
                continue
            if len(row) >= 2:
                u, v = int(row[0]), int(row[1])
                if u != v:
                    edges.append((u, v))
    finally:
        if should_close:
            f.close()
    return edges


def output_file_name(config: Config) -> str:
    """Report file name; encodes every parameter that identifies a run."""
    parts = [
        os.path.basename(config.graph_path),
        "NS", config.node_selection_policy.value,
        "GICP", config.init_color_policy.value,
        "T", str(float(config.temperature)),
        "D", str(float(config.delta)),
        "RNSS", str(config.neighbor_sample_size),
        "URSS", str(config.random_sample_size),
        "A", str(float(config.alpha)),
    ]
    if config.annealing_policy is not AnnealingPolicy.LINEAR:
        parts += ["ANN", config.annealing_policy.value]
    parts += ["R", str(config.rounds)]
    return "_".join(parts) + ".txt"


class ReportWriter:
    """Appends one line per round to the run's report file.

    The first write creates the output directory (if needed), truncates the
    file and puts the header in place.
    """

    def __init__(self, config: Config):
        self.output_dir = config.output_dir
        self.path = os.path.join(config.output_dir, output_file_name(config))
        self.created = False

    def write(self, metrics: RoundMetrics) -> None:
        if not self.created:
            os.makedirs(self.output_dir, exist_ok=True)
            with open(self.path, 'w') as f:
                f.write(REPORT_HEADER)
            self.created = True
        line = DELIMITER.join(str(v) for v in (metrics.round, metrics.edge_cut, metrics.swaps, metrics.migrations))
        with open(self.path, 'a') as f:
            f.write(line + "\n")


def load_report(src: TextOrPath) -> pd.DataFrame:
    """Parse a report file back into a frame with one row per round."""
    rows = []
    f, should_close = _open_text(src)
    try:
        for line in f:
            line = line.strip()
            if not line or line.startswith('#') or line.startswith('Round'):
                continue
            fields = line.split()
            rows.append([int(x) for x in fields[:len(REPORT_COLUMNS)]])
    finally:
        if should_close:
            f.close()
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)
