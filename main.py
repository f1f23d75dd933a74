import argparse
import logging
import os

from jabeja.io_utils import load_metis_graph, load_edge_list_csv, ReportWriter
from jabeja.models import AnnealingPolicy, Config, GraphInitColorPolicy, NodeSelectionPolicy
from jabeja.graph_build import build_jabeja_graph, graph_from_edges, synthetic_graph
from jabeja.partitioning.swap import JabejaSimulation
from jabeja.partitioning.evaluation import summary


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Ja-be-Ja – decentralized graph partitioning simulator")
    # Input modes
    p.add_argument('--graph', type=str, help='Graph file in METIS adjacency format')
    p.add_argument('--edges', type=str, help='Edge list CSV u,v')
    p.add_argument('--generate', type=int, default=None, help='Generate a random graph with N nodes')
    p.add_argument('--density', type=float, default=0.05)

    # Partitioning
    p.add_argument('--partitions', type=int, default=4, help='Number of colors')
    p.add_argument('--init_color_policy', type=str, default='ROUND_ROBIN',
                   choices=[c.value for c in GraphInitColorPolicy])
    p.add_argument('--node_selection', type=str, default='HYBRID',
                   choices=[c.value for c in NodeSelectionPolicy])
    p.add_argument('--neighbor_sample_size', type=int, default=3)
    p.add_argument('--random_sample_size', type=int, default=6)
    p.add_argument('--alpha', type=float, default=2.0)

    # Annealing
    p.add_argument('--rounds', type=int, default=1000)
    p.add_argument('--temp', type=float, default=2.0, help='Initial temperature')
    p.add_argument('--delta', type=float, default=0.003, help='Cooldown step (LINEAR) or factor (EXPONENTIAL)')
    p.add_argument('--annealing', type=str, default='LINEAR', choices=[c.value for c in AnnealingPolicy])
    p.add_argument('--restart', type=int, default=0, help='Reset temperature every N rounds (0 = never)')
    p.add_argument('--seed', type=int, default=0)

    # Output
    p.add_argument('--output_dir', type=str, default='output')
    p.add_argument('--log_level', type=str, default='INFO')
    return p


def config_from_args(args, graph_path: str) -> Config:
    return Config(
        rounds=args.rounds,
        temperature=args.temp,
        delta=args.delta,
        annealing_policy=AnnealingPolicy(args.annealing),
        node_selection_policy=NodeSelectionPolicy(args.node_selection),
        neighbor_sample_size=args.neighbor_sample_size,
        random_sample_size=args.random_sample_size,
        alpha=args.alpha,
        restart=args.restart,
        seed=args.seed,
        graph_path=graph_path,
        output_dir=args.output_dir,
        num_partitions=args.partitions,
        init_color_policy=GraphInitColorPolicy(args.init_color_policy),
    )


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    # Load graph
    try:
        if args.graph:
            G = load_metis_graph(args.graph)
            graph_path = args.graph
        elif args.edges:
            G = graph_from_edges(load_edge_list_csv(args.edges))
            graph_path = args.edges
        elif args.generate is not None:
            G = synthetic_graph(args.generate, args.density, seed=args.seed)
            graph_path = f"gnp_{args.generate}_{args.density}"
        else:
            raise SystemExit("Provide --graph, --edges, or --generate N")
        config = config_from_args(args, graph_path).validate()
        graph = build_jabeja_graph(G, config.num_partitions, config.init_color_policy, seed=config.seed)
    except (OSError, ValueError) as e:
        raise SystemExit(f"Cannot set up the run: {e}")

    report = ReportWriter(config)
    sim = JabejaSimulation(graph, config, report=report)
    try:
        history = sim.run()
    except OSError as e:
        raise SystemExit(f"Cannot write report {report.path}: {e}")

    print(summary(graph, sim.state, history[-1]))
    print(f"Saved: {os.path.abspath(report.path)}")
    return history


if __name__ == '__main__':
    main()
