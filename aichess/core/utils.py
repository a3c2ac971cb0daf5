def format_info(algorithm, depth, move, score, nodes, leaves, elapsed_ms):
    move_str = move.uci() if move else "-"
    nps = int(nodes * 1000 / elapsed_ms) if elapsed_ms > 0 else 0
    return (f"info algorithm {algorithm.value} depth {depth} score {score} nodes {nodes} "
            f"leaves {leaves} nps {nps} time {int(elapsed_ms)} bestmove {move_str}")
