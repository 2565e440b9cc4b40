"""textsearch Tkinter GUI

Two-pane layout:
  Left: corpus pick (folder or zip) + Build Index + Indexed documents
  Right: query box + Term/Phrase mode + Matches ("name: positions")

Queries are normalized with the index's own rule before lookup unless the
config says otherwise.
"""
from pathlib import Path
import zipfile
import tkinter as tk
from tkinter import ttk, filedialog, messagebox

from .config import SearchConfig
from .corpus import open_corpus
from .indexer import DuplicateDocumentError, build_index
from .main import format_hits, run_query


class TextSearchGUI(tk.Tk):
    def __init__(self, config: SearchConfig):
        super().__init__()
        self.title("textsearch")
        self.geometry("1000x680")

        self.config_ = config
        self.corpus_path: Path = config.corpus_path
        self.inv = None  # InvertedIndex

        outer = ttk.Frame(self, padding=12)
        outer.pack(fill=tk.BOTH, expand=True)

        # Corpus selection row
        src_row = ttk.Frame(outer)
        src_row.pack(fill=tk.X, pady=(0, 8))
        ttk.Label(src_row, text="Corpus:").pack(side=tk.LEFT)
        ttk.Button(src_row, text="Open folder…", command=self._on_open_folder).pack(side=tk.LEFT, padx=(8, 0))
        ttk.Button(src_row, text="Open zip…", command=self._on_open_zip).pack(side=tk.LEFT, padx=8)
        self.corpus_var = tk.StringVar(value=f"Source: {self.corpus_path}")
        ttk.Label(src_row, textvariable=self.corpus_var).pack(side=tk.LEFT, padx=8)

        ttk.Separator(outer, orient="horizontal").pack(fill=tk.X, pady=6)

        two_col = ttk.Frame(outer)
        two_col.pack(fill=tk.BOTH, expand=True)

        # Left column — Indexing
        left = ttk.Frame(two_col, padding=(0, 0, 12, 0))
        left.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        ttk.Label(left, text="Indexer", font=("Segoe UI", 11, "bold")).pack(anchor="w")
        ttk.Button(left, text="Build Index", command=self._on_build_index).pack(anchor="w", pady=(6, 6))

        self.files_list = self._scrolled_list(left, "Indexed documents")

        self.summary_var = tk.StringVar(value="No index yet.")
        ttk.Label(left, textvariable=self.summary_var).pack(anchor="w", pady=(6, 0))

        ttk.Separator(two_col, orient="vertical").pack(side=tk.LEFT, fill=tk.Y, padx=4)

        # Right column — Search
        right = ttk.Frame(two_col, padding=(12, 0, 0, 0))
        right.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        ttk.Label(right, text="Search", font=("Segoe UI", 11, "bold")).pack(anchor="w")

        qrow = ttk.Frame(right)
        qrow.pack(fill=tk.X, pady=(6, 6))
        ttk.Label(qrow, text="Query:").pack(side=tk.LEFT)
        self.query_var = tk.StringVar()
        ent = ttk.Entry(qrow, textvariable=self.query_var, width=28)
        ent.pack(side=tk.LEFT, padx=8)
        ent.bind("<Return>", lambda e: self._on_search())
        ttk.Button(qrow, text="Search", command=self._on_search).pack(side=tk.LEFT)

        mode_row = ttk.Frame(right)
        mode_row.pack(fill=tk.X, pady=(0, 6))
        self.mode_var = tk.StringVar(value="term")
        ttk.Radiobutton(mode_row, text="Term", value="term", variable=self.mode_var).pack(side=tk.LEFT)
        ttk.Radiobutton(mode_row, text="Exact phrase", value="phrase", variable=self.mode_var).pack(side=tk.LEFT, padx=8)

        self.results_list = self._scrolled_list(right, "Matches")

    def _scrolled_list(self, parent, title: str) -> tk.Listbox:
        frame = ttk.LabelFrame(parent, text=title)
        frame.pack(fill=tk.BOTH, expand=True)
        lb = tk.Listbox(frame, height=25)
        yscroll = ttk.Scrollbar(frame, orient="vertical", command=lb.yview)
        lb.configure(yscrollcommand=yscroll.set)
        lb.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        yscroll.pack(side=tk.RIGHT, fill=tk.Y)
        return lb

    # ---- UI callbacks ----
    def _on_open_folder(self):
        path = filedialog.askdirectory(title="Select corpus folder")
        if path:
            self._select(Path(path))

    def _on_open_zip(self):
        path = filedialog.askopenfilename(title="Select corpus zip", filetypes=[("Zip files", "*.zip")])
        if path:
            self._select(Path(path))

    def _select(self, path: Path):
        self.corpus_path = path
        self.corpus_var.set(f"Source: {path}")
        self.inv = None
        self.files_list.delete(0, tk.END)
        self.results_list.delete(0, tk.END)
        self.summary_var.set("Ready to build index.")

    def _on_build_index(self):
        try:
            corpus = open_corpus(self.corpus_path, self.config_.extensions)
            self.inv = build_index(corpus, self.config_.special_characters)
        except FileNotFoundError as e:
            messagebox.showerror("Corpus not found", str(e))
            return
        except (NotADirectoryError, zipfile.BadZipFile) as e:
            messagebox.showerror("Not a folder or zip", str(e))
            return
        except DuplicateDocumentError as e:
            messagebox.showerror("Duplicate document", str(e))
            return

        self.files_list.delete(0, tk.END)
        for name in sorted(self.inv.documents):
            self.files_list.insert(tk.END, name)

        summary = f"Indexed {len(self.inv.documents)} documents • {len(self.inv)} terms."
        if corpus.skipped:
            summary += f" Skipped {len(corpus.skipped)} unreadable."
        self.summary_var.set(summary)

    def _on_search(self):
        self.results_list.delete(0, tk.END)
        if self.inv is None:
            messagebox.showwarning("No index", "Please Build Index first.")
            return
        q = self.query_var.get().strip()
        if not q:
            return
        hits = run_query(self.inv, q, self.mode_var.get() == "phrase", self.config_.normalize_queries)
        for line in format_hits(hits):
            self.results_list.insert(tk.END, line)
