import tkinter as tk
from tkinter import scrolledtext

from code_assistant.api.service import get_default_session, session_snapshot
from code_assistant.domain.answer import extract_code_blocks
from code_assistant.prompts import EXAMPLE_PROMPTS
from code_assistant.session.runner import SessionRunner


POLL_MS = 100


class App:
    def __init__(self, root, runner: SessionRunner):
        self.root = root
        self.root.title("AI Code Assistant")
        self.runner = runner
        self.rendered = 0
        self.last_answer = ""
        tk.Label(root, text="Popular Examples").pack(anchor=tk.W)
        examples = tk.Frame(root)
        examples.pack(fill=tk.X)
        for example in EXAMPLE_PROMPTS:
            tk.Button(examples, text=example, command=lambda e=example: self.use_example(e)).pack(side=tk.LEFT)
        self.chat = scrolledtext.ScrolledText(root, width=100, height=28)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("query", foreground="#1a73e8")
        self.chat.tag_config("prose", foreground="#202124")
        self.chat.tag_config("code", foreground="#34a853", font=("Courier", 10))
        bar = tk.Frame(root)
        bar.pack(fill=tk.X)
        self.entry = tk.Entry(bar)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.entry.bind("<KeyRelease>", self.on_edit)
        self.send_btn = tk.Button(bar, text="Ask AI", command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        self.copy_btn = tk.Button(bar, text="Copy", command=self.on_copy)
        self.copy_btn.pack(side=tk.LEFT)
        self.error = tk.Label(root, text="", fg="#d93025")
        self.error.pack(fill=tk.X)
        self.poll()

    def use_example(self, example):
        self.entry.delete(0, tk.END)
        self.entry.insert(0, example)
        self.runner.set_pending_query(example)

    def on_edit(self, event):
        self.runner.set_pending_query(self.entry.get())

    def on_send(self):
        self.runner.submit(self.entry.get())

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_copy(self):
        blocks = extract_code_blocks(self.last_answer)
        self.root.clipboard_clear()
        self.root.clipboard_append("\n\n".join(blocks) if blocks else self.last_answer)

    def poll(self):
        snap = session_snapshot(self.runner.controller)
        loading = snap["is_loading"]
        self.entry.config(state=tk.DISABLED if loading else tk.NORMAL)
        self.send_btn.config(state=tk.DISABLED if loading else tk.NORMAL, text="Processing..." if loading else "Ask AI")
        history = snap["history"]
        if len(history) > self.rendered and not loading:
            for item in history[self.rendered:]:
                self.chat.insert(tk.END, f"Q: {item['query']}\n", "query")
                self.chat.insert(tk.END, f"{item['response']}\n\n", item["answer_kind"])
                self.last_answer = item["response"]
            # 成功后草稿已被清空
            self.rendered = len(history)
            self.entry.delete(0, tk.END)
            self.chat.see(tk.END)
        self.error.config(text=snap["last_error"] or "")
        self.root.after(POLL_MS, self.poll)


if __name__ == "__main__":
    runner = SessionRunner(get_default_session()).start()
    root = tk.Tk()
    app = App(root, runner)
    try:
        root.mainloop()
    finally:
        runner.stop()
