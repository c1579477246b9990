import sys
from pathlib import Path

import pytest

# Make `labgrader` and `main` importable without installing
ROOT_PATH = Path(__file__).resolve().parent.parent
if ROOT_PATH.as_posix() not in sys.path:
    sys.path.insert(0, ROOT_PATH.as_posix())

from labgrader.config_loader import GraderConfig, load_config  # noqa: E402

SHIPPED_CONFIG = ROOT_PATH / "grader_config.yml"

TASK_APP = """\
import { useState } from "react";
import TaskList from "./TaskList";

// TODO: capture input
export default function TaskApp() {
  const [text, setText] = useState("");
  const [tasks, setTasks] = useState([]);

  const handleSubmit = () => {
    setTasks((prev) => [...prev, { id: Date.now(), text: text }]);
    setText("");
  };

  const handleDelete = (id) => {
    setTasks((prev) => prev.filter((t) => t.id !== id));
  };

  return (
    <div>
      <input value={text} onChange={(e) => setText(e.target.value)} />
      <p>{text}</p>
      <button onClick={handleSubmit}>Submit</button>
      <button onClick={() => setTasks([])}>Clear All</button>
      <TaskList tasks={tasks} onDelete={handleDelete} />
    </div>
  );
}
"""

TASK_LIST = """\
import TaskItem from "./TaskItem";

export default function TaskList({ tasks, onDelete }) {
  if (tasks.length === 0) return <p>No tasks yet</p>;
  return (
    <ul>
      {tasks.map((task) => (
        <TaskItem key={task.id} task={task} onDelete={onDelete} />
      ))}
    </ul>
  );
}
"""

TASK_ITEM = """\
export default function TaskItem({ task, onDelete }) {
  return (
    <li>
      <span>{task.text}</span>
      <button onClick={() => onDelete(task.id)}>Delete</button>
    </li>
  );
}
"""

# Starter code as handed out: the solution only exists in comments
STARTER_TASK_APP = """\
export default function TaskApp() {
  // const [text, setText] = useState("");
  /*
    <input value={text} onChange={(e) => setText(e.target.value)} />
    <p>{text}</p>
  */
  return <div></div>;
}
"""


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create `files` (relative path -> content) under `root`."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def react_project(root: Path, app: str = TASK_APP, task_list: str = TASK_LIST, item: str = TASK_ITEM) -> Path:
    files = {"package.json": "{}\n"}
    if app is not None:
        files["src/components/TaskApp.jsx"] = app
    if task_list is not None:
        files["src/components/TaskList.jsx"] = task_list
    if item is not None:
        files["src/components/TaskItem.jsx"] = item
    return write_tree(root, files)


def make_config(**overrides) -> GraderConfig:
    data = {
        "lab_name": "demo-lab",
        "deadline": "2026-02-25T20:59:00+03:00",
        "files": {"App": ["App.jsx", "App.js"], "List": ["List.jsx"]},
        "tasks": [
            {
                "id": "t1",
                "name": "Task 1",
                "marks": 20,
                "requirements": [
                    {"label": "state", "files": ["App"], "patterns": [r"\buseState\s*\("]},
                    {"label": "input", "files": ["App"], "patterns": [r"<\s*input\b"]},
                    {"label": "button", "files": ["App"], "patterns": [r"<\s*button\b"]},
                    {"label": "map", "files": ["List"], "patterns": [r"\.map\s*\(", r"\.forEach\s*\("]},
                ],
            },
        ],
    }
    data.update(overrides)
    return GraderConfig(**data)


@pytest.fixture
def shipped_config() -> GraderConfig:
    return load_config(SHIPPED_CONFIG)
