import logging
from typing import Optional

from chess_engine.config import CONFIG


def setup_logging(level: Optional[str] = None):
    """Configure root logging from CONFIG.log_level unless a level is given."""
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def format_search_info(difficulty, depth, score, nodes, elapsed, move, mate_score) -> str:
    nps = int(nodes / elapsed) if elapsed > 0 else 0
    if score is not None and abs(score) >= mate_score:
        score_str = f"mate {'white' if score > 0 else 'black'}"
    else:
        score_str = f"cp {score}"
    move_str = move.notation or move.uci() if move else "-"
    return (f"{difficulty} depth {depth} score {score_str} nodes {nodes} "
            f"nps {nps} time {int(elapsed * 1000)}ms move {move_str}")
