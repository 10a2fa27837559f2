"""FastAPI web application for tasklens."""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends, Response, status
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from tasklens import __version__
from tasklens.api.auth_models import AuthResponse, LoginRequest, ProfileUpdateRequest, RegisterRequest
from tasklens.api.task_models import (
    CategoriesResponse,
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskUpdateRequest,
    TaskViewResponse,
)
from tasklens.auth.dependencies import get_current_user
from tasklens.auth.jwt import ACCESS_TOKEN_LIFETIME, create_access_token
from tasklens.auth.passwords import hash_password, verify_password
from tasklens.database.database import get_db, init_db
from tasklens.database.repository import TaskRepository
from tasklens.database.user_repository import UserRepository
from tasklens.engine import (
    DerivationError,
    available_categories,
    category_suggestions,
    compute_view,
)
from tasklens.models.constants import CATEGORY_SUGGESTIONS
from tasklens.models.task_factory import apply_task_update, create_task
from tasklens.models.user import User
from tasklens.models.view import ALL, PriorityFilter, SortKey, StatusFilter, ViewSelection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="tasklens API",
    description="Personal task tracking with filtered, sorted views and summary statistics",
    version=__version__,
    lifespan=lifespan,
)


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id),
        expires_in=int(ACCESS_TOKEN_LIFETIME.total_seconds()),
        user=user.model_dump(mode="json"),
    )


def _get_task_or_404(repo: TaskRepository, user_id: str, task_id: str):
    task = repo.get(user_id, task_id)
    if not task:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@app.get("/", response_class=HTMLResponse)
async def root():
    """Root endpoint with basic UI."""
    return """
    <!DOCTYPE html>
    <html>
    <head>
        <title>tasklens</title>
        <style>
            body { font-family: Arial, sans-serif; max-width: 800px; margin: 50px auto; padding: 20px; }
            button, select, input { padding: 6px 10px; margin: 4px; }
            .section { margin: 20px 0; padding: 15px; border: 1px solid #ddd; border-radius: 5px; }
            .completed { text-decoration: line-through; color: #888; }
            .badge { font-size: 0.8em; padding: 2px 6px; border-radius: 4px; background: #eee; margin-left: 4px; }
        </style>
    </head>
    <body>
        <h1>tasklens</h1>

        <div class="section" id="login">
            <h2>Login</h2>
            <input id="email" placeholder="Email">
            <input id="password" type="password" placeholder="Password">
            <button onclick="login()">Login</button>
            <div id="auth-status"></div>
        </div>

        <div class="section">
            <h2>Tasks</h2>
            <select id="filter_status" onchange="loadView()">
                <option value="all">All</option><option value="pending">Pending</option><option value="completed">Completed</option>
            </select>
            <select id="filter_priority" onchange="loadView()">
                <option value="all">All priorities</option><option value="high">High</option>
                <option value="medium">Medium</option><option value="low">Low</option>
            </select>
            <select id="filter_category" onchange="loadView()"><option value="all">All categories</option></select>
            <select id="sort_key" onchange="loadView()">
                <option value="due_date">Due date</option><option value="priority">Priority</option>
                <option value="title">Title</option><option value="created_at">Date created</option>
            </select>
            <div id="stats"></div>
            <ul id="tasks"></ul>
        </div>

        <script>
            let token = localStorage.getItem('token');

            // User-supplied text only ever goes through textContent
            function el(tag, text, className) {
                const node = document.createElement(tag);
                if (text !== undefined) node.textContent = text;
                if (className) node.className = className;
                return node;
            }

            function setMessage(id, text) {
                document.getElementById(id).textContent = text;
            }

            async function login() {
                const res = await fetch('/api/auth/login', {
                    method: 'POST',
                    headers: { 'Content-Type': 'application/json' },
                    body: JSON.stringify({
                        email: document.getElementById('email').value,
                        password: document.getElementById('password').value
                    })
                });
                const data = await res.json();
                if (!res.ok) {
                    setMessage('auth-status', 'Error: ' + (data.detail || res.statusText));
                    return;
                }
                token = data.access_token;
                localStorage.setItem('token', token);
                setMessage('auth-status', 'Logged in as ' + data.user.email);
                loadView();
            }

            async function toggle(id) {
                await fetch(`/api/tasks/${encodeURIComponent(id)}/toggle`, {
                    method: 'PUT', headers: { 'Authorization': 'Bearer ' + token }
                });
                loadView();
            }

            function renderCategories(categories) {
                const select = document.getElementById('filter_category');
                const current = select.value;
                select.replaceChildren(el('option', 'All categories'));
                select.firstChild.value = 'all';
                categories.forEach(c => {
                    const option = el('option', c);
                    option.value = c;
                    select.appendChild(option);
                });
                select.value = categories.includes(current) ? current : 'all';
            }

            function renderTask(t) {
                const item = el('li', undefined, t.status);
                const box = document.createElement('input');
                box.type = 'checkbox';
                box.checked = t.status === 'completed';
                box.addEventListener('click', () => toggle(t.id));
                item.appendChild(box);
                item.appendChild(document.createTextNode(' ' + t.title));
                item.appendChild(el('span', t.priority, 'badge'));
                t.categories.forEach(c => item.appendChild(el('span', c, 'badge')));
                return item;
            }

            async function loadView() {
                if (!token) return;
                const list = document.getElementById('tasks');
                const params = new URLSearchParams();
                ['filter_status', 'filter_priority', 'filter_category', 'sort_key'].forEach(
                    name => params.set(name, document.getElementById(name).value)
                );
                const res = await fetch('/api/tasks/view?' + params, { headers: { 'Authorization': 'Bearer ' + token } });
                if (!res.ok) {
                    if (res.status === 401) { localStorage.removeItem('token'); token = null; }
                    list.replaceChildren(el('li', 'Error loading tasks'));
                    return;
                }
                const data = await res.json();

                renderCategories(data.categories);

                const s = data.statistics;
                setMessage('stats', data.show_statistics
                    ? `${s.completion_percentage}% complete · ${s.total} total, ${s.pending} pending, ` +
                      `${s.due_soon} due soon, ${s.overdue} overdue`
                    : '');

                list.replaceChildren(...(data.tasks.length === 0
                    ? [el('li', 'No tasks match your current filters')]
                    : data.tasks.map(renderTask)));
            }

            loadView();
        </script>
    </body>
    </html>
    """


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


@app.post("/api/auth/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """Create an account and return an access token."""
    user_repo = UserRepository(db)
    if user_repo.get_by_email(request.email):
        raise HTTPException(status_code=400, detail="User already exists")

    now = datetime.utcnow()
    user = User(id=str(uuid.uuid4()), email=request.email, name=request.name, created_at=now, updated_at=now)
    try:
        user = user_repo.create(user, hash_password(request.password))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to register user: {type(e).__name__}")

    logger.info(f"Registered user {user.id}")
    return _auth_response(user)


@app.post("/api/auth/login", response_model=AuthResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for an access token."""
    found = UserRepository(db).get_with_password_hash(request.email)
    if not found or not verify_password(request.password, found[1]):
        logger.warning("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = found[0]
    logger.info(f"User {user.id} logged in")
    return _auth_response(user)


@app.get("/api/auth/logout")
def logout(current_user: User = Depends(get_current_user)):
    """Log out. Tokens are stateless, so the client simply drops its token."""
    logger.info(f"User {current_user.id} logged out")
    return {"success": True}


@app.get("/api/auth/me", response_model=User)
def me(current_user: User = Depends(get_current_user)):
    """Get the authenticated user."""
    return current_user


@app.put("/api/auth/profile", response_model=User)
def update_profile(
    request: ProfileUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update name, email, preferences, and optionally the password."""
    user_repo = UserRepository(db)

    if request.email and request.email != current_user.email:
        other = user_repo.get_by_email(request.email)
        if other and other.id != current_user.id:
            raise HTTPException(status_code=400, detail="Email is already in use")

    password_hash = None
    if request.new_password:
        if not request.current_password:
            raise HTTPException(status_code=400, detail="Current password is required to set a new password")
        stored_hash = user_repo.get_password_hash(current_user.id)
        if not stored_hash or not verify_password(request.current_password, stored_hash):
            raise HTTPException(status_code=400, detail="Current password is incorrect")
        password_hash = hash_password(request.new_password)

    changes = {
        k: v
        for k, v in request.model_dump(exclude_unset=True, exclude={"current_password", "new_password"}).items()
        if v is not None
    }
    if "preferences" in changes:
        # Partial preference updates keep the other saved preferences
        changes["preferences"] = {**current_user.preferences.model_dump(), **changes["preferences"]}
    updated = User(**{**current_user.model_dump(), **changes, "updated_at": datetime.utcnow()})

    try:
        return user_repo.update(updated, password_hash=password_hash)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update profile: {type(e).__name__}")


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@app.get("/api/tasks", response_model=TaskListResponse)
def list_tasks(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the raw task collection for the current user (newest first)."""
    tasks = TaskRepository(db).get_all(current_user.id)
    return TaskListResponse(tasks=tasks, count=len(tasks))


@app.post("/api/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task_endpoint(
    request: TaskCreateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new pending task owned by the current user."""
    task = create_task(
        user_id=current_user.id,
        title=request.title,
        description=request.description,
        priority=request.priority,
        due_date=request.due_date,
        categories=request.categories,
    )
    try:
        created = TaskRepository(db).create(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create task: {type(e).__name__}")
    return TaskResponse(task=created)


@app.get("/api/tasks/view", response_model=TaskViewResponse)
def view_tasks(
    filter_status: Optional[StatusFilter] = None,
    filter_priority: PriorityFilter = PriorityFilter.ALL,
    filter_category: str = ALL,
    sort_key: Optional[SortKey] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Filtered, sorted task list plus statistics over all of the user's tasks.

    Status filter and sort key fall back to the user's saved preferences.
    """
    preferences = current_user.preferences
    selection = ViewSelection(
        filter_status=filter_status or preferences.default_view,
        filter_priority=filter_priority,
        filter_category=filter_category,
        sort_key=sort_key or preferences.default_sort,
    )

    tasks = TaskRepository(db).get_all(current_user.id)
    try:
        view = compute_view(tasks, selection, now=datetime.utcnow())
    except DerivationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return TaskViewResponse(
        selection=selection,
        tasks=view.visible_tasks,
        count=len(view.visible_tasks),
        statistics=view.statistics,
        show_statistics=view.statistics.has_tasks,
        categories=available_categories(tasks),
    )


@app.get("/api/tasks/categories", response_model=CategoriesResponse)
def list_categories(
    task_id: Optional[str] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Category facets, plus suggestions for the task form.

    When `task_id` is given, labels already on that task are left out of the
    suggestions.
    """
    repo = TaskRepository(db)
    tasks = repo.get_all(current_user.id)
    selected = _get_task_or_404(repo, current_user.id, task_id).categories if task_id else []
    return CategoriesResponse(
        categories=available_categories(tasks),
        suggestions=category_suggestions(selected, tasks, seed=CATEGORY_SUGGESTIONS),
    )


@app.get("/api/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Get a single task."""
    return TaskResponse(task=_get_task_or_404(TaskRepository(db), current_user.id, task_id))


@app.put("/api/tasks/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    request: TaskUpdateRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit any fields of a task except its id, owner and creation time."""
    repo = TaskRepository(db)
    task = _get_task_or_404(repo, current_user.id, task_id)

    try:
        updated = apply_task_update(task, request.model_dump(exclude_unset=True))
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid task update: {e.errors()[0]['msg']}")

    try:
        return TaskResponse(task=repo.update(updated))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update task: {type(e).__name__}")


@app.put("/api/tasks/{task_id}/toggle", response_model=TaskResponse)
def toggle_task_status(task_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Flip a task between pending and completed."""
    toggled = TaskRepository(db).toggle(current_user.id, task_id)
    if not toggled:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return TaskResponse(task=toggled)


@app.delete("/api/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Permanently delete a task."""
    if not TaskRepository(db).delete(current_user.id, task_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
