"""Desktop window for the fridge, built on tkinter."""

from __future__ import annotations

import logging
from datetime import date

from .config import FridgeConfig
from .freshness import BAND_COLORS
from .handlers import FridgeEvents, HandlerResult
from .models import Freshness

logger = logging.getLogger(__name__)


class FridgeApp:
    """Main window: an add form on top and the colored fridge list below.

    All actions go through a FridgeEvents implementation; the window keeps
    no inventory state of its own besides the rows it displays.
    """

    def __init__(self, root, handlers: FridgeEvents, config: FridgeConfig) -> None:
        import tkinter as tk
        from tkinter import ttk

        self._tk = tk
        self._root = root
        self._handlers = handlers
        self._rows: dict[str, tuple[str, date]] = {}
        self._max_quantity = config.ui.max_quantity

        root.title("Fridge")
        root.geometry(f"{config.ui.width}x{config.ui.height}")

        form = ttk.LabelFrame(root, text="Add food", padding=8)
        form.pack(fill=tk.X, padx=10, pady=(10, 5))

        self._name = tk.StringVar()
        self._best_before = tk.StringVar(value=handlers.today().isoformat())
        self._quantity = tk.IntVar(value=1)

        ttk.Label(form, text="Name").grid(row=0, column=0, sticky=tk.W)
        name_entry = ttk.Entry(form, textvariable=self._name, width=28)
        name_entry.grid(row=0, column=1, padx=4)
        ttk.Label(form, text="Best before (YYYY-MM-DD)").grid(row=1, column=0, sticky=tk.W)
        ttk.Entry(form, textvariable=self._best_before, width=12).grid(
            row=1, column=1, padx=4, sticky=tk.W
        )
        ttk.Label(form, text="Quantity").grid(row=2, column=0, sticky=tk.W)
        ttk.Spinbox(
            form, from_=1, to=config.ui.max_quantity,
            textvariable=self._quantity, width=5,
        ).grid(row=2, column=1, padx=4, sticky=tk.W)
        ttk.Button(form, text="Ok", command=self._add).grid(
            row=0, column=2, rowspan=3, padx=10, sticky=tk.NS
        )

        self._today_label = ttk.Label(form, font=("TkDefaultFont", 16, "bold"))
        self._today_label.grid(row=0, column=3, rowspan=3, padx=20, sticky=tk.E)
        form.columnconfigure(3, weight=1)
        name_entry.bind("<Return>", lambda _event: self._add())

        table = ttk.Frame(root, padding=(10, 5))
        table.pack(fill=tk.BOTH, expand=True)
        columns = ("name", "best_before", "quantity", "days_left")
        self._tree = ttk.Treeview(table, columns=columns, show="headings", selectmode="browse")
        for col, heading, width in (
            ("name", "Food", 240),
            ("best_before", "Best before", 120),
            ("quantity", "Qty", 50),
            ("days_left", "Days left", 80),
        ):
            self._tree.heading(col, text=heading)
            self._tree.column(col, width=width, anchor=tk.W if col == "name" else tk.CENTER)
        for band in Freshness:
            self._tree.tag_configure(band.name, foreground=BAND_COLORS[band])
        scroll = ttk.Scrollbar(table, orient=tk.VERTICAL, command=self._tree.yview)
        self._tree.configure(yscrollcommand=scroll.set)
        self._tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scroll.pack(side=tk.RIGHT, fill=tk.Y)

        buttons = ttk.Frame(root, padding=(10, 0, 10, 10))
        buttons.pack(fill=tk.X)
        ttk.Button(buttons, text="Eaten / Open", command=self._consume).pack(side=tk.LEFT)
        ttk.Button(buttons, text="Remove", command=self._remove).pack(side=tk.LEFT, padx=6)
        self._status = ttk.Label(buttons)
        self._status.pack(side=tk.RIGHT)

        self._show(self._handlers.on_list())

    def _add(self) -> None:
        from tkinter import messagebox

        try:
            best_before = date.fromisoformat(self._best_before.get().strip())
        except ValueError:
            messagebox.showerror("Fridge", "Best before must be a date like 2024-01-31")
            return
        try:
            quantity = int(self._quantity.get())
        except (ValueError, self._tk.TclError):
            messagebox.showerror("Fridge", "Quantity must be a whole number")
            return
        if not 1 <= quantity <= self._max_quantity:
            messagebox.showerror(
                "Fridge", f"Quantity must be between 1 and {self._max_quantity}"
            )
            return

        result = self._handlers.on_add(self._name.get(), best_before, quantity)
        if result.ok:
            self._name.set("")
            self._quantity.set(1)
        self._show(result)

    def _consume(self) -> None:
        selected = self._selected()
        if selected is not None:
            self._show(self._handlers.on_consume(*selected))

    def _remove(self) -> None:
        selected = self._selected()
        if selected is not None:
            self._show(self._handlers.on_remove(*selected))

    def _selected(self) -> tuple[str, date] | None:
        selection = self._tree.selection()
        if not selection:
            self._status.configure(text="Select a food first")
            return None
        return self._rows[selection[0]]

    def _show(self, result: HandlerResult) -> None:
        from tkinter import messagebox

        if not result.ok:
            messagebox.showerror("Fridge", result.message)

        today = self._handlers.today()
        self._today_label.configure(text=today.strftime("%d / %m"))
        self._tree.delete(*self._tree.get_children())
        self._rows = {}
        for listed in result.items:
            name = listed.name + (" (open)" if listed.item.opened else "")
            iid = self._tree.insert(
                "",
                self._tk.END,
                values=(
                    name,
                    listed.best_before.strftime("%d / %m / %Y"),
                    listed.quantity,
                    listed.days_remaining,
                ),
                tags=(listed.freshness.name,),
            )
            self._rows[iid] = listed.item.key
        self._status.configure(text=result.message if result.ok else "")


def run_gui(handlers: FridgeEvents, config: FridgeConfig, notice: str | None = None) -> None:
    """Open the fridge window and block until it is closed.

    Args:
        handlers: Event handlers bound to the inventory store.
        config: Loaded configuration (window size, quantity limit).
        notice: Optional message shown once at startup, e.g. a reset store.
    """
    import tkinter as tk
    from tkinter import messagebox

    root = tk.Tk()
    FridgeApp(root, handlers, config)
    if notice:
        messagebox.showwarning("Fridge", notice, parent=root)
    logger.info("Fridge window opened")
    root.mainloop()
