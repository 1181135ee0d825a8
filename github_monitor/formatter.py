"""Render GitHub activity events as Telegram Markdown text."""

TIME_FORMAT = "%Y-%m-%d %H:%M:%S UTC"
COMMENT_PREVIEW_LENGTH = 100


def _get(mapping, *keys):
    """Walk nested dicts, returning an empty string for anything missing."""
    value = mapping
    for key in keys:
        if not isinstance(value, dict):
            return ""
        value = value.get(key)
    return "" if value is None else value


def _render_push(payload):
    commits = payload.get("commits") or []
    ref = _get(payload, "ref")
    body = "[~] *Push Event*\n"
    body += f"Branch: `{ref.split('/')[-1]}`\n"
    body += f"Commits: {len(commits)}\n"
    if commits:
        body += f"\nLatest commit:\n_{_get(commits[0], 'message')}_"
    return body


def _render_create(payload):
    body = "[+] *Create Event*\n"
    body += f"Type: {_get(payload, 'ref_type')}\n"
    if payload.get("ref"):
        body += f"Name: `{payload['ref']}`"
    return body


def _render_delete(payload):
    body = "[-] *Delete Event*\n"
    body += f"Type: {_get(payload, 'ref_type')}\n"
    body += f"Name: `{_get(payload, 'ref')}`"
    return body


def _render_issue(payload):
    body = f"[!] *Issue {_get(payload, 'action')}*\n"
    body += (f"Title: [{_get(payload, 'issue', 'title')}]"
             f"({_get(payload, 'issue', 'html_url')})\n")
    body += f"#{_get(payload, 'issue', 'number')}"
    return body


def _render_issue_comment(payload):
    comment = str(_get(payload, "comment", "body"))
    preview = comment[:COMMENT_PREVIEW_LENGTH]
    if len(comment) > COMMENT_PREVIEW_LENGTH:
        preview += "..."
    body = "[*] *Comment on Issue*\n"
    body += (f"Issue: [#{_get(payload, 'issue', 'number')}]"
             f"({_get(payload, 'issue', 'html_url')})\n")
    body += f"Comment: _{preview}_"
    return body


def _render_pull_request(payload):
    body = f"[<>] *Pull Request {_get(payload, 'action')}*\n"
    body += (f"Title: [{_get(payload, 'pull_request', 'title')}]"
             f"({_get(payload, 'pull_request', 'html_url')})\n")
    body += f"#{_get(payload, 'pull_request', 'number')}"
    return body


def _render_review(payload):
    body = f"[?] *PR Review {_get(payload, 'action')}*\n"
    body += (f"PR: [#{_get(payload, 'pull_request', 'number')}]"
             f"({_get(payload, 'pull_request', 'html_url')})\n")
    body += f"State: {_get(payload, 'review', 'state')}"
    return body


def _render_review_comment(payload):
    body = "[*] *Comment on PR*\n"
    body += (f"PR: [#{_get(payload, 'pull_request', 'number')}]"
             f"({_get(payload, 'pull_request', 'html_url')})")
    return body


def _render_watch(payload):
    return "[*] *Starred the repository*"


def _render_fork(payload):
    body = "[Y] *Forked the repository*\n"
    body += (f"Fork: [{_get(payload, 'forkee', 'full_name')}]"
             f"({_get(payload, 'forkee', 'html_url')})")
    return body


def _render_release(payload):
    body = f"[^] *Release {_get(payload, 'action')}*\n"
    body += (f"Tag: [{_get(payload, 'release', 'tag_name')}]"
             f"({_get(payload, 'release', 'html_url')})\n")
    body += f"Name: {_get(payload, 'release', 'name')}"
    return body


RENDERERS = {
    "PushEvent": _render_push,
    "CreateEvent": _render_create,
    "DeleteEvent": _render_delete,
    "IssuesEvent": _render_issue,
    "IssueCommentEvent": _render_issue_comment,
    "PullRequestEvent": _render_pull_request,
    "PullRequestReviewEvent": _render_review,
    "PullRequestReviewCommentEvent": _render_review_comment,
    "WatchEvent": _render_watch,
    "ForkEvent": _render_fork,
    "ReleaseEvent": _render_release,
}


def event_label(event_type):
    """Display name for an event type without its "Event" suffix."""
    if event_type.endswith("Event"):
        return event_type[:-len("Event")]
    return event_type


def _render_fallback(event_type):
    return f"[.] *{event_label(event_type)}*"


def format_activity(event):
    """Render one activity event as a Markdown message fragment."""
    message = "[+] *GitHub Activity*\n\n"
    message += f"[>] User: [{event.actor}]({event.actor_url})\n"
    message += f"[#] Repository: [{event.repo}]({event.repo_url})\n"
    message += f"[@] Time: {event.created_at.strftime(TIME_FORMAT)}\n\n"

    renderer = RENDERERS.get(event.type)
    if renderer is None:
        message += _render_fallback(event.type)
    else:
        message += renderer(event.payload)
    return message
