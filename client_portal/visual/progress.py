"""Progress reporting for Streamlit pages that fetch from Jira/Tempo."""

from __future__ import annotations

from dataclasses import dataclass

import streamlit as st


@dataclass
class ProgressEvent:
    message: str
    current: int | None = None
    total: int | None = None


class ProgressReporter:
    """Banner + progress bar; ``callback`` matches ProjectService's ProgressCallback."""

    def __init__(self, title: str):
        self._container = st.container()
        self._container.info(title)
        self._message = self._container.empty()
        self._bar = self._container.progress(0.0)
        self.events: list[ProgressEvent] = []
        self._done = False

    def callback(self, message: str, current: int | None = None, total: int | None = None) -> None:
        self.update(message, current=current, total=total)

    def update(self, message: str, *, current: int | None = None, total: int | None = None) -> None:
        if self._done:
            return
        self.events.append(ProgressEvent(message, current, total))
        self._message.write(message)
        if total and current is not None:
            self._bar.progress(min(max(current / total, 0.0), 1.0))

    def complete(self, message: str) -> None:
        if self._done:
            return
        self._bar.progress(1.0)
        self._container.success(message)
        self._done = True

    def error(self, message: str) -> None:
        if self._done:
            return
        self._container.error(message)
        self._done = True
