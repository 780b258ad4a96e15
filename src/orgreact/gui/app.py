"""Qt application entrypoint for the OrgReact reaction browser."""

from __future__ import annotations

import sys

from PySide6 import QtCore, QtGui, QtWidgets
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg
from matplotlib.figure import Figure

from orgreact.config import get_settings
from orgreact.errors import TutorError
from orgreact.gui.browser import (
    ALL_GROUPS,
    TUTOR_GREETING,
    BrowserFilter,
    chat_markdown,
    filter_reactions,
    format_compound_detail,
    format_reaction_detail,
    list_label,
    reaction_compound_labels,
    related_reactions,
)
from orgreact.models import FUNCTIONAL_GROUPS
from orgreact.store import ReactionStore
from orgreact.tutor import AITutor


class GroupChart(FigureCanvasQTAgg):
    def __init__(self, parent: QtWidgets.QWidget | None = None) -> None:
        self.figure = Figure(figsize=(4, 3), tight_layout=True)
        super().__init__(self.figure)
        self.setParent(parent)
        self.axes = self.figure.add_subplot(1, 1, 1)

    def plot_counts(self, counts: dict[str, int]) -> None:
        self.axes.clear()
        self.axes.bar(list(counts), list(counts.values()))
        self.axes.set_ylabel("Reactions")
        self.axes.tick_params(axis="x", labelrotation=45)
        self.draw()


class CompoundDialog(QtWidgets.QDialog):
    """A compound's properties plus the reactions it appears in, one tab per role."""

    def __init__(self, store: ReactionStore, compound_id: int, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        compound = store.get_compound(compound_id)
        self.setWindowTitle(compound.name)
        self.resize(600, 450)
        layout = QtWidgets.QVBoxLayout(self)

        properties = QtWidgets.QPlainTextEdit(format_compound_detail(compound))
        properties.setReadOnly(True)
        layout.addWidget(properties, stretch=1)

        self.tabs = QtWidgets.QTabWidget()
        for title, reactions in related_reactions(store, compound_id).items():
            listing = QtWidgets.QListWidget()
            listing.addItems([list_label(reaction) for reaction in reactions])
            self.tabs.addTab(listing, f"{title} ({len(reactions)})")
        layout.addWidget(self.tabs, stretch=2)


class TutorWorker(QtCore.QThread):
    answered = QtCore.Signal(str)
    failed = QtCore.Signal(str)

    def __init__(self, tutor: AITutor, question: str) -> None:
        super().__init__()
        self.tutor = tutor
        self.question = question

    def run(self) -> None:
        try:
            self.answered.emit(self.tutor.tutor_response(self.question))
        except TutorError as exc:
            self.failed.emit(str(exc))


class TutorDialog(QtWidgets.QDialog):
    def __init__(self, tutor: AITutor, parent: QtWidgets.QWidget | None = None) -> None:
        super().__init__(parent)
        self.tutor = tutor
        self.messages: list[tuple[str, str]] = [("assistant", TUTOR_GREETING)]
        self.worker: TutorWorker | None = None
        self.setWindowTitle("Chemistry AI Tutor")
        self.resize(520, 640)
        layout = QtWidgets.QVBoxLayout(self)

        self.transcript = QtWidgets.QTextBrowser()
        layout.addWidget(self.transcript, stretch=1)

        row = QtWidgets.QHBoxLayout()
        self.question = QtWidgets.QLineEdit()
        self.question.setPlaceholderText("Ask about reactions or just chat...")
        self.question.returnPressed.connect(self._send)
        self.send_button = QtWidgets.QPushButton("Send")
        self.send_button.clicked.connect(self._send)
        row.addWidget(self.question)
        row.addWidget(self.send_button)
        layout.addLayout(row)

        self._render()

    def _render(self) -> None:
        self.transcript.setMarkdown(chat_markdown(self.messages))
        bar = self.transcript.verticalScrollBar()
        bar.setValue(bar.maximum())

    def _set_busy(self, busy: bool) -> None:
        self.send_button.setEnabled(not busy)
        self.question.setEnabled(not busy)

    def _send(self) -> None:
        question = self.question.text().strip()
        if not question or self.worker is not None:
            return
        self.messages.append(("user", question))
        self.question.clear()
        self._render()
        self._set_busy(True)
        self.worker = TutorWorker(self.tutor, question)
        self.worker.answered.connect(self._on_answer)
        self.worker.failed.connect(self._on_failure)
        self.worker.finished.connect(self._on_finished)
        self.worker.start()

    def _on_answer(self, text: str) -> None:
        self.messages.append(("assistant", text))
        self._render()

    def _on_failure(self, message: str) -> None:
        QtWidgets.QMessageBox.warning(self, "Error", message)

    def _on_finished(self) -> None:
        self.worker = None
        self._set_busy(False)
        self.question.setFocus()

    def reject(self) -> None:
        if self.worker is not None:
            self.worker.wait()
        super().reject()


class ReactionBrowser(QtWidgets.QMainWindow):
    def __init__(self, store: ReactionStore, tutor: AITutor | None = None) -> None:
        super().__init__()
        self.store = store
        self.tutor = tutor
        self.setWindowTitle("OrgReact")
        self.resize(1100, 700)

        central = QtWidgets.QWidget()
        self.setCentralWidget(central)
        layout = QtWidgets.QHBoxLayout(central)

        left = QtWidgets.QWidget()
        left_layout = QtWidgets.QVBoxLayout(left)

        self.search_box = QtWidgets.QLineEdit()
        self.search_box.setPlaceholderText("Search reactions...")
        self.search_box.textChanged.connect(self._refresh_list)

        self.group_select = QtWidgets.QComboBox()
        self.group_select.addItems([ALL_GROUPS, *FUNCTIONAL_GROUPS])
        self.group_select.currentTextChanged.connect(self._refresh_list)

        self.bookmarked_only = QtWidgets.QCheckBox("Bookmarked only")
        self.bookmarked_only.toggled.connect(self._refresh_list)

        self.reaction_list = QtWidgets.QListWidget()
        self.reaction_list.currentItemChanged.connect(self._show_selected)

        left_layout.addWidget(self.search_box)
        left_layout.addWidget(self.group_select)
        left_layout.addWidget(self.bookmarked_only)
        left_layout.addWidget(self.reaction_list)

        right = QtWidgets.QWidget()
        right_layout = QtWidgets.QVBoxLayout(right)

        self.detail = QtWidgets.QPlainTextEdit()
        self.detail.setReadOnly(True)

        self.bookmark_button = QtWidgets.QPushButton("Toggle Bookmark")
        self.bookmark_button.setEnabled(False)
        self.bookmark_button.clicked.connect(self._toggle_bookmark)

        self.compound_list = QtWidgets.QListWidget()
        self.compound_list.setToolTip("Double-click a compound to see its reactions")
        self.compound_list.itemDoubleClicked.connect(self._open_compound)

        self.tutor_button = QtWidgets.QPushButton("AI Tutor")
        self.tutor_button.setEnabled(tutor is not None)
        if tutor is None:
            self.tutor_button.setToolTip("Set GEMINI_API_KEY to use the AI tutor")
        self.tutor_button.clicked.connect(self._open_tutor)

        self.chart = GroupChart()
        self.chart.plot_counts(store.functional_group_counts())

        right_layout.addWidget(self.detail, stretch=2)
        right_layout.addWidget(self.compound_list, stretch=1)
        right_layout.addWidget(self.bookmark_button)
        right_layout.addWidget(self.tutor_button)
        right_layout.addWidget(self.chart, stretch=1)

        layout.addWidget(left, stretch=1)
        layout.addWidget(right, stretch=2)

        self._refresh_list()

    def _criteria(self) -> BrowserFilter:
        return BrowserFilter(
            query=self.search_box.text(),
            group=self.group_select.currentText(),
            bookmarked_only=self.bookmarked_only.isChecked(),
        )

    def _refresh_list(self, *_args) -> None:
        selected = self._selected_id()
        self.reaction_list.clear()
        for reaction in filter_reactions(self.store, self._criteria()):
            item = QtWidgets.QListWidgetItem(list_label(reaction))
            item.setData(QtCore.Qt.ItemDataRole.UserRole, reaction.id)
            self.reaction_list.addItem(item)
            if reaction.id == selected:
                self.reaction_list.setCurrentItem(item)

    def _selected_id(self) -> int | None:
        item = self.reaction_list.currentItem()
        if item is None:
            return None
        return item.data(QtCore.Qt.ItemDataRole.UserRole)

    def _show_selected(self, *_args) -> None:
        reaction_id = self._selected_id()
        self.bookmark_button.setEnabled(reaction_id is not None)
        if reaction_id is None:
            self.detail.clear()
            self.compound_list.clear()
            return
        self.detail.setPlainText(format_reaction_detail(self.store.get_reaction(reaction_id)))
        self.compound_list.clear()
        for label, compound_id in reaction_compound_labels(self.store, reaction_id):
            item = QtWidgets.QListWidgetItem(label)
            item.setData(QtCore.Qt.ItemDataRole.UserRole, compound_id)
            self.compound_list.addItem(item)

    def _toggle_bookmark(self) -> None:
        reaction_id = self._selected_id()
        if reaction_id is None:
            return
        updated = self.store.toggle_bookmark(reaction_id)
        self.statusBar().showMessage(
            "Added to bookmarks" if updated.is_bookmarked else "Removed from bookmarks", 2000
        )
        self._refresh_list()

    def _open_compound(self, item: QtWidgets.QListWidgetItem) -> None:
        compound_id = item.data(QtCore.Qt.ItemDataRole.UserRole)
        CompoundDialog(self.store, compound_id, self).exec()

    def _open_tutor(self) -> None:
        if self.tutor is not None:
            TutorDialog(self.tutor, self).exec()

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if self.tutor is not None:
            self.tutor.close()
        super().closeEvent(event)


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    settings = get_settings()
    store = ReactionStore.from_seed_file(settings.seed_file)
    window = ReactionBrowser(store, AITutor.from_settings(settings))
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
