from __future__ import annotations

from hayagriva.core.fragments import CodeWriter
from hayagriva.core.protocol import AppType
from hayagriva.templates.base import CARD_DECLARATIONS, AppTemplate, TemplateContext

INITIAL_TASKS = [
    {"id": 1, "title": "Plan sprint goals", "done": False, "due": "Today"},
    {"id": 2, "title": "Review pull requests", "done": True, "due": "Today"},
    {"id": 3, "title": "Update project board", "done": False, "due": "Tomorrow"},
]


class TaskManagerTemplate(AppTemplate):
    app_type = AppType.TASKMANAGER
    loading_label = "tasks"
    handled_features = frozenset({"Search & Filtering"})

    def write_state(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        w.const_array("initialTasks", INITIAL_TASKS)
        w.blank()
        w.line("const [tasks, setTasks] = useState(initialTasks);")
        w.line("const [newTask, setNewTask] = useState('');")
        if ctx.has("Search & Filtering"):
            w.line(
                "const visibleTasks = tasks.filter((task) => "
                "task.title.toLowerCase().includes(query.toLowerCase()));"
            )
        else:
            w.line("const visibleTasks = tasks;")
        w.line("const remaining = tasks.filter((task) => !task.done).length;")

    def write_handlers(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.blank()
        with w.block("const addTask = () => {", "};"):
            w.line("if (!newTask.trim()) return;")
            w.line("setTasks([...tasks, { id: tasks.length + 1, title: newTask, done: false, due: 'Today' }]);")
            w.line("setNewTask('');")
        w.blank()
        w.line(
            "const toggleTask = (id) => "
            "setTasks(tasks.map((task) => (task.id === id ? { ...task, done: !task.done } : task)));"
        )
        w.blank()
        w.line("const removeTask = (id) => setTasks(tasks.filter((task) => task.id !== id));")

    def write_main(self, ctx: TemplateContext, w: CodeWriter) -> None:
        with w.element("div", 'className="task-header"'):
            w.leaf("h2", "My Tasks")
            w.leaf("span", "{remaining} remaining", 'className="task-count"')

        with w.element("div", 'className="task-form"'):
            w.void(
                "Input",
                'placeholder="Add a new task..." value={newTask} onChange={(e) => setNewTask(e.target.value)}'
                + ctx.aria('aria-label="New task"'),
            )
            w.leaf("Button", "Add", "onClick={addTask}")

        if ctx.has("Search & Filtering"):
            w.void(
                "Input",
                'className="task-filter" placeholder="Filter tasks..." value={query} '
                "onChange={(e) => setQuery(e.target.value)}" + ctx.aria('aria-label="Filter tasks"'),
            )

        with w.element("ul", 'className="task-list"'):
            with w.each("visibleTasks", "task"):
                with w.element("li", "key={task.id} className={task.done ? 'task-card done' : 'task-card'}"):
                    with w.element("label"):
                        w.void("input", 'type="checkbox" checked={task.done} onChange={() => toggleTask(task.id)}')
                        w.leaf("span", "{task.title}")
                    w.leaf("span", "{task.due}", 'className="task-due"')
                    w.leaf(
                        "Button",
                        "Remove",
                        'variant="ghost" onClick={() => removeTask(task.id)}' + ctx.aria('aria-label="Remove task"'),
                    )

    def write_styles(self, ctx: TemplateContext, w: CodeWriter) -> None:
        w.rule(".task-header", {"display": "flex", "justify-content": "space-between", "align-items": "center"})
        w.blank()
        w.rule(".task-count", {"font-size": "0.875rem", "opacity": "0.7"})
        w.blank()
        w.rule(".task-form", {"display": "flex", "gap": "8px", "margin": "1.5rem 0"})
        w.blank()
        w.rule(".task-filter", {"margin-bottom": "1rem"})
        w.blank()
        w.rule(".task-list", {"list-style": "none", "padding": "0", "display": "flex", "flex-direction": "column", "gap": "0.75rem"})
        w.blank()
        w.rule(
            ".task-card",
            dict(CARD_DECLARATIONS, **{"display": "flex", "align-items": "center", "justify-content": "space-between", "padding": "1rem"}),
        )
        w.blank()
        w.rule(".task-card.done span", {"text-decoration": "line-through", "opacity": "0.6"})
        w.blank()
        w.rule(".task-due", {"font-size": "0.75rem", "color": "var(--color-secondary)"})
        w.blank()


template = TaskManagerTemplate()
