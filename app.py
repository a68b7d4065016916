import logging
from typing import Any, List

import streamlit as st

from controller import GameController
from engine import SessionView
from settings import load_settings
from tiers import TIERS

CARD_BACK = "❔"

# --------------- Utilities ---------------

def _init_state():
    ss = st.session_state
    if "controller" not in ss:
        settings = load_settings()
        logging.basicConfig(level=settings.log_level)
        ss.settings = settings
        ss.controller = GameController(settings)  # owns the session, timers and generation counter


def _chunk(lst: List[Any], n: int) -> List[List[Any]]:
    '''Split iterable into consecutive chunks of size n.'''
    return [lst[i:i+n] for i in range(0, len(lst), n)]


# --------------- Status ---------------

def _status_bar(controller: GameController):
    # A mismatch flipping back changes the board, which lives outside this fragment
    if controller.pump():
        st.rerun()

    view = controller.view()
    moves_col, time_col, pairs_col = st.columns(3)
    with moves_col:
        st.metric("Moves", view.move_count)
    with time_col:
        st.metric("Time", view.elapsed)
    with pairs_col:
        st.metric("Pairs", f"{view.pairs_found}/{view.total_pairs}")
    st.progress(view.pairs_found / view.total_pairs if view.total_pairs else 0.0)


def view_status(controller: GameController):
    if controller.needs_polling:
        st.fragment(_status_bar, run_every=controller.settings.tick_seconds)(controller)
    else:
        _status_bar(controller)


# --------------- Board ---------------

def view_board(controller: GameController, view: SessionView):
    clicked = None
    for row in _chunk(list(view.cards), view.grid_size):
        cols = st.columns(view.grid_size)
        for col, card in zip(cols, row):
            with col:
                label = card.symbol if card.visible else CARD_BACK
                if st.button(label, key=f"card_{card.id}", disabled=card.visible):
                    clicked = card.id

    if clicked is not None:
        controller.select(clicked)
        st.rerun()


# --------------- Controls ---------------

def view_controls(controller: GameController, view: SessionView):
    st.markdown("---")
    cols = st.columns(len(TIERS))
    for col, tier in zip(cols, TIERS.values()):
        with col:
            current = tier.name == view.difficulty
            if st.button(tier.label, key=f"difficulty_{tier.name}", type="primary" if current else "secondary"):
                controller.change_difficulty(tier.name)
                st.rerun()

    if st.button("🔀 Restart Game", key="restart"):
        controller.restart()
        st.rerun()


# --------------- Win ---------------

def view_win(controller: GameController, view: SessionView):
    st.balloons()
    with st.container(border=True):
        st.subheader("🎉 Congratulations!")
        st.write("You completed the game in:")
        st.markdown(f"## {view.elapsed}")
        st.write(f"Total moves: {view.move_count}")

        left, right = st.columns(2)
        with left:
            if st.button("Play Again", key="play_again", type="primary"):
                controller.restart()
                st.rerun()
        with right:
            if st.button("✖ Close", key="close_congrats"):
                controller.dismiss_congrats()
                st.rerun()


# --------------- App Entrypoint ---------------

def main():
    st.set_page_config(
        page_title="Memory Game",
        page_icon="🧠",
        layout="centered",
    )

    _init_state()
    controller: GameController = st.session_state.controller
    controller.pump()

    st.title("🧠 Memory Game")
    view_status(controller)

    view = controller.view()
    if controller.show_congrats:
        view_win(controller, view)
    view_board(controller, view)
    view_controls(controller, view)


if __name__ == "__main__":
    main()
