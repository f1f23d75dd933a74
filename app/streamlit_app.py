import sys, os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import io
import time

import streamlit as st

from jabeja.io_utils import load_metis_graph, load_edge_list_csv, load_report, ReportWriter
from jabeja.models import AnnealingPolicy, Config, GraphInitColorPolicy, NodeSelectionPolicy
from jabeja.graph_build import build_jabeja_graph, graph_from_edges, synthetic_graph
from jabeja.partitioning.swap import JabejaSimulation
from jabeja.partitioning.evaluation import summary

# ---------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------
st.set_page_config(page_title="Ja-be-Ja – Partitioner", layout="wide")
st.title("Ja-be-Ja – Decentralized Graph Partitioning")


def _bytes_of(upload):
    if upload is None:
        return None
    return upload.getvalue()

# ---------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------
@st.cache_data
def load_metis_cached(graph_bytes: bytes):
    return load_metis_graph(io.BytesIO(graph_bytes))

@st.cache_data
def load_edges_cached(edges_bytes: bytes):
    return graph_from_edges(load_edge_list_csv(io.BytesIO(edges_bytes)))

@st.cache_data
def build_synthetic_cached(n: int, p: float, seed: int = 0):
    return synthetic_graph(n, p, seed=seed)

# ---------------------------------------------------------------------
# UI
# ---------------------------------------------------------------------
st.subheader("Inputs")
mode = st.radio("Input mode", ["METIS graph", "Edge list CSV", "Synthetic"], horizontal=True)

with st.form("controls"):
    if mode == "METIS graph":
        graph_file = st.file_uploader("METIS graph file", type=["graph", "txt", "metis"])
        n = p = None
    elif mode == "Edge list CSV":
        graph_file = st.file_uploader("Edge list CSV (u,v)", type=["csv"])
        n = p = None
    else:
        graph_file = None
        n = st.number_input("Synthetic nodes (N)", 10, 20000, 500, step=10)
        p = st.slider("Edge probability (density)", 0.001, 0.5, 0.02)

    c1, c2, c3 = st.columns(3)
    partitions = c1.number_input("Partitions", 1, 64, 4)
    init_policy = c2.selectbox("Initial colors", [c.value for c in GraphInitColorPolicy])
    node_selection = c3.selectbox("Node selection", [c.value for c in NodeSelectionPolicy], index=2)

    with st.expander("Annealing settings", expanded=True):
        colA, colB, colC = st.columns(3)
        annealing = colA.selectbox("Annealing policy", [c.value for c in AnnealingPolicy])
        temp = colB.number_input("Initial temperature (T0)", 0.0001, 100.0, 2.0, 0.1)
        delta = colC.number_input("Delta", 0.0001, 1.0, 0.003, 0.0001, format="%.4f")
        colD, colE, colF = st.columns(3)
        rounds = colD.number_input("Rounds", 1, 100_000, 1000, 100)
        restart = colE.number_input("Restart every N rounds (0 = never)", 0, 100_000, 0, 10)
        alpha = colF.number_input("Alpha", 0.0, 10.0, 2.0, 0.1)
        colG, colH, colI = st.columns(3)
        rnss = colG.number_input("Neighbour sample size", 0, 100, 3)
        urss = colH.number_input("Random sample size", 0, 100, 6)
        seed = colI.number_input("Seed", 0, 2**31 - 1, 0)

    submitted = st.form_submit_button("Run Ja-be-Ja")

# ---------------------------------------------------------------------
# Run on Submit
# ---------------------------------------------------------------------
if submitted:
    t0 = time.perf_counter()

    if mode == "Synthetic":
        G = build_synthetic_cached(int(n), float(p), int(seed))
        graph_name = f"gnp_{int(n)}_{float(p)}"
    else:
        if graph_file is None:
            st.error("Please upload a graph file.")
            st.stop()
        try:
            if mode == "METIS graph":
                G = load_metis_cached(_bytes_of(graph_file))
            else:
                G = load_edges_cached(_bytes_of(graph_file))
        except ValueError as e:
            st.error(f"Could not read graph: {e}")
            st.stop()
        graph_name = graph_file.name

    timestamp = time.strftime("%Y%m%d-%H%M%S")
    output_dir = os.path.join(os.getcwd(), "outputs", f"jabeja_run_{timestamp}")
    config = Config(
        rounds=int(rounds),
        temperature=float(temp),
        delta=float(delta),
        annealing_policy=AnnealingPolicy(annealing),
        node_selection_policy=NodeSelectionPolicy(node_selection),
        neighbor_sample_size=int(rnss),
        random_sample_size=int(urss),
        alpha=float(alpha),
        restart=int(restart),
        seed=int(seed),
        graph_path=graph_name,
        output_dir=output_dir,
        num_partitions=int(partitions),
        init_color_policy=GraphInitColorPolicy(init_policy),
    )
    try:
        config.validate()
    except ValueError as e:
        st.error(str(e))
        st.stop()

    graph = build_jabeja_graph(G, config.num_partitions, config.init_color_policy, seed=config.seed)
    report = ReportWriter(config)
    sim = JabejaSimulation(graph, config, report=report)
    with st.spinner("Running rounds..."):
        history = sim.run()
    t1 = time.perf_counter()

    # -----------------------------------------------------------------
    # UI Output
    # -----------------------------------------------------------------
    st.subheader("Summary")
    st.text(summary(graph, sim.state, history[-1]))
    st.caption(f"Total time: {t1 - t0:.3f}s")

    frame = load_report(report.path).set_index("round")
    st.subheader("Edge cut per round")
    st.line_chart(frame[["edge_cut"]])
    st.subheader("Swaps and migrations")
    st.line_chart(frame[["swaps", "migrations"]])

    with open(report.path) as f:
        st.download_button("Download report", f.read(), file_name=os.path.basename(report.path), mime="text/plain")

    st.info(f"Results saved locally to: {output_dir}")
    st.success("Partitioning complete.")
