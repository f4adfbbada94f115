"""Server-rendered login and feed pages."""

import logging
from collections.abc import Iterable
from html import escape

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse

from petmatch.api.dependencies import get_container, optional_user
from petmatch.domain.animals import Candidate
from petmatch.domain.errors import CandidateFetchError
from petmatch.domain.models import UserIdentity
from petmatch.services.feed import SwipeSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse, response_model=None)
async def feed_page(
    request: Request, user: UserIdentity | None = Depends(optional_user)
) -> HTMLResponse | RedirectResponse:
    """Render the swipe feed for the signed-in user."""
    if user is None:
        return RedirectResponse("/auth", status_code=status.HTTP_303_SEE_OTHER)
    container = get_container(request)
    message = None
    try:
        session = await container.feed_sessions.get_or_start(user.id)
    except CandidateFetchError:
        logger.exception("Initial feed fetch failed", extra={"user_id": str(user.id)})
        session = container.feed_sessions.get(user.id)
        message = "Couldn't load pets. Try reloading."
    return HTMLResponse(render_feed_page(user, session, message))


@router.get("/auth", response_class=HTMLResponse, response_model=None)
async def auth_page(
    request: Request,
    message: str | None = None,
    user: UserIdentity | None = Depends(optional_user),
) -> HTMLResponse | RedirectResponse:
    """Render the login and signup forms."""
    if user is not None:
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    providers = get_container(request).auth_service.oauth_providers
    return HTMLResponse(render_auth_page(message, providers))


def render_feed_page(
    user: UserIdentity, session: SwipeSession | None, message: str | None = None
) -> str:
    """Render the feed page around the current candidate."""
    current = session.current() if session else None
    liked_count = session.liked_count if session else 0
    if current is not None:
        body = _candidate_card(current)
    else:
        body = _exhausted_card()
    notice = f'<p class="notice">{escape(message)}</p>' if message else ""
    who = escape(user.display_name or user.email or "")
    return _FEED_TEMPLATE.format(
        who=who,
        liked_count=liked_count,
        notice=notice,
        body=body,
    )


def render_auth_page(
    message: str | None = None, providers: Iterable[str] = ()
) -> str:
    """Render the login/signup page with a link per enabled provider."""
    notice = f'<p class="notice">{escape(message)}</p>' if message else ""
    links = "".join(
        f'<a class="gesture dislike" href="/api/auth/oauth/{escape(name)}">'
        f"Continue with {escape(name.capitalize())}</a>"
        for name in sorted(providers)
    )
    return _AUTH_TEMPLATE.replace("{providers}", links).replace("{notice}", notice)


def age_label(age: int | None) -> str:
    """Return a human label for an age in years."""
    if age is None:
        return ""
    return f"{age} year" if age == 1 else f"{age} years"


def _candidate_card(candidate: Candidate) -> str:
    if candidate.photo_url:
        photo = (
            f'<img class="photo" src="{escape(candidate.photo_url)}" '
            f'alt="{escape(candidate.name)}" />'
        )
    else:
        photo = '<div class="photo placeholder">&#128062;</div>'
    species = escape(candidate.species)
    if candidate.breed:
        species = f"{species} &bull; {escape(candidate.breed)}"
    details = [f'<p class="species">{species}</p>']
    if candidate.age is not None:
        details.append(f'<span class="badge">{age_label(candidate.age)}</span>')
    if candidate.location:
        details.append(f'<p class="location">{escape(candidate.location)}</p>')
    if candidate.behavior:
        details.append(f'<p class="behavior">{escape(candidate.behavior)}</p>')
    return f"""
      <div class="card" data-animal-id="{candidate.id}">
        {photo}
        <div class="info">
          <h2>{escape(candidate.name)}</h2>
          {"".join(details)}
        </div>
        <div class="actions">
          <button class="gesture dislike" onclick="swipe('dislike')">Pass</button>
          <button class="gesture like" onclick="swipe('like')">Like</button>
        </div>
      </div>
      <p class="hint">Use the buttons or the left/right arrow keys.</p>
    """


def _exhausted_card() -> str:
    return """
      <div class="card empty">
        <h2>You've seen every pet!</h2>
        <p>Come back later to meet new friends.</p>
        <button class="gesture" onclick="reloadFeed()">Reload</button>
      </div>
    """


_STYLE = """
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0;
             background: linear-gradient(135deg, #fdf2f8, #eff6ff); }
      header { display: flex; justify-content: space-between; align-items: center;
               padding: 1rem 2rem; background: #fff; }
      main { max-width: 32rem; margin: 2rem auto; padding: 0 1rem; }
      .card { background: #fff; border-radius: 1rem; overflow: hidden;
              box-shadow: 0 10px 30px rgba(0, 0, 0, 0.15); }
      .card.empty { padding: 3rem; text-align: center; }
      .photo { width: 100%; height: 24rem; object-fit: cover; display: block; }
      .placeholder { display: flex; align-items: center; justify-content: center;
                     font-size: 4rem; background: #f3f4f6; }
      .info { padding: 1rem 1.5rem; }
      .badge { background: #fce7f3; border-radius: 999px; padding: 0.2rem 0.6rem; }
      .actions { display: flex; justify-content: center; gap: 2rem; padding: 1rem; }
      .gesture { padding: 0.6rem 1.4rem; border-radius: 999px; cursor: pointer; }
      .like { background: #ec4899; color: #fff; border: none; }
      .dislike { background: #fff; border: 2px solid #ef4444; color: #ef4444; }
      .notice { background: #fee2e2; padding: 0.6rem 1rem; border-radius: 0.5rem; }
      .hint { text-align: center; color: #6b7280; font-size: 0.85rem; }
      input { padding: 0.4rem 0.6rem; width: 100%; box-sizing: border-box; }
      form { margin-bottom: 1.5rem; }
"""

_FEED_TEMPLATE = (
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>PetMatch</title>
    <style>"""
    + _STYLE.replace("{", "{{").replace("}", "}}")
    + """</style>
  </head>
  <body>
    <header>
      <h1>PetMatch</h1>
      <div>
        <span>{who}</span>
        <span class="badge" id="liked">{liked_count} likes</span>
        <button class="gesture" onclick="logout()">Log out</button>
      </div>
    </header>
    <main>
      <p class="notice" id="error" hidden></p>
      {notice}
      {body}
    </main>
    <script>
      let busy = false;
      function setButtons(disabled) {{
        document.querySelectorAll('button').forEach(b => b.disabled = disabled);
      }}
      function showError(text) {{
        const error = document.getElementById('error');
        error.textContent = text;
        error.hidden = false;
      }}
      async function post(path) {{
        if (busy) return;
        busy = true;
        setButtons(true);
        let reloading = false;
        try {{
          const res = await fetch(path, {{ method: 'POST' }});
          if (res.ok) {{
            reloading = true;
            window.location.reload();
            return;
          }}
          const data = await res.json().catch(() => ({{}}));
          showError(data.detail || ('Error: ' + res.status));
        }} catch (err) {{
          showError('Network error. Check your connection and try again.');
        }} finally {{
          if (!reloading) {{
            setButtons(false);
            busy = false;
          }}
        }}
      }}
      function swipe(action) {{ return post('/api/feed/' + action); }}
      function reloadFeed() {{ return post('/api/feed/reload'); }}
      async function logout() {{
        try {{
          await fetch('/api/auth/logout', {{ method: 'POST' }});
        }} finally {{
          window.location.href = '/auth';
        }}
      }}
      document.addEventListener('keydown', (event) => {{
        if (!document.querySelector('.like')) return;
        if (event.key === 'ArrowRight') swipe('like');
        if (event.key === 'ArrowLeft') swipe('dislike');
      }});
    </script>
  </body>
</html>
"""
)

_AUTH_TEMPLATE = (
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>PetMatch - Sign in</title>
    <style>"""
    + _STYLE
    + """</style>
  </head>
  <body>
    <main>
      <div class="card empty">
        <h1>PetMatch</h1>
        <p>Connect with animal lovers</p>
        <p class="notice" id="error" hidden></p>
        {notice}
        <h2>Sign in</h2>
        <form id="login">
          <input name="email" type="email" placeholder="you@email.com" required />
          <input name="password" type="password" placeholder="Password" required />
          <button class="gesture like" type="submit">Sign in</button>
        </form>
        <h2>Create account</h2>
        <form id="signup">
          <input name="name" type="text" placeholder="Your name" required />
          <input name="email" type="email" placeholder="you@email.com" required />
          <input name="password" type="password" placeholder="Password" required />
          <button class="gesture like" type="submit">Create account</button>
        </form>
        {providers}
      </div>
    </main>
    <script>
      function showError(text) {
        const error = document.getElementById('error');
        error.textContent = text;
        error.hidden = false;
      }
      async function submitForm(event, path) {
        event.preventDefault();
        const form = event.target;
        const button = form.querySelector('button');
        button.disabled = true;
        const payload = Object.fromEntries(new FormData(form).entries());
        let res;
        let data;
        try {
          res = await fetch(path, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify(payload)
          });
          data = await res.json().catch(() => ({}));
        } catch (err) {
          showError('Network error. Check your connection and try again.');
          return;
        } finally {
          button.disabled = false;
        }
        if (!res.ok) {
          const detail = Array.isArray(data.detail)
            ? 'Check the form fields.'
            : data.detail;
          showError(detail || ('Error: ' + res.status));
          return;
        }
        if (data.signed_in) {
          window.location.href = '/';
        } else {
          showError('Account created! Check your email to confirm it.');
        }
      }
      document.getElementById('login')
        .addEventListener('submit', (e) => submitForm(e, '/api/auth/login'));
      document.getElementById('signup')
        .addEventListener('submit', (e) => submitForm(e, '/api/auth/signup'));
    </script>
  </body>
</html>
"""
)
