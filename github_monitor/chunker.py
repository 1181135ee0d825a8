"""Split formatted activity into size-bounded summary messages."""
import logging

logger = logging.getLogger(__name__)

RULE = "=" * 50
SEPARATOR = f"\n{'-' * 50}\n\n"
NO_ACTIVITY_NOTICE = f"[i] No new activities during this period.\n{'-' * 50}\n"
STARTUP_PERIOD = "Server Startup - All Recent Events"


class MessageBlock:
    """One deliverable message: a header followed by whole event fragments."""

    def __init__(self, header, fragments=None, notice=None, separator=SEPARATOR):
        self.header = header
        self.fragments = list(fragments or [])
        self.notice = notice
        self.separator = separator

    @property
    def text(self):
        if self.notice is not None:
            return self.header + self.notice
        return self.header + "".join(
            fragment + self.separator for fragment in self.fragments)

    def __len__(self):
        return len(self.text)

    def __repr__(self):
        return f"MessageBlock(fragments={len(self.fragments)}, length={len(self)})"


def summary_header(account, period, total):
    """Header for the first message of a summary."""
    header = f"\n{RULE}\n"
    header += f"  GitHub Activity Summary - {account}\n"
    header += f"  Period: {period}\n"
    header += f"  Total Activities: {total}\n"
    header += f"{RULE}\n\n"
    return header


def continuation_header(index):
    """Header for every message after the first; index starts at 2."""
    return f"\n{RULE}\n  GitHub Activity Summary (continued {index})\n{RULE}\n\n"


def describe_period(first_run, interval_seconds):
    """Human description of the window a summary covers."""
    if first_run:
        return STARTUP_PERIOD
    if interval_seconds % 3600 == 0:
        hours = interval_seconds // 3600
        return "Last 1 Hour" if hours == 1 else f"Last {hours} Hours"
    minutes = max(1, round(interval_seconds / 60))
    return "Last 1 Minute" if minutes == 1 else f"Last {minutes} Minutes"


def build_blocks(fragments, account, period, max_length):
    """Pack fragments, oldest first, into message blocks of at most max_length.

    Fragments are never split. A block is closed before the fragment that would
    overflow it, but always holds at least one fragment, so a single fragment
    larger than the limit yields one oversized block rather than a corrupted one.
    An empty input yields a single block carrying the no-activity notice.
    """
    fragments = list(fragments)
    header = summary_header(account, period, len(fragments))
    if not fragments:
        return [MessageBlock(header, notice=NO_ACTIVITY_NOTICE)]

    blocks = []
    current = MessageBlock(header)
    current_length = len(header)

    for fragment in fragments:
        fragment_length = len(fragment) + len(SEPARATOR)
        if current.fragments and current_length + fragment_length > max_length:
            blocks.append(current)
            next_header = continuation_header(len(blocks) + 1)
            current = MessageBlock(next_header)
            current_length = len(next_header)
        if current_length + fragment_length > max_length:
            logger.warning(
                "Activity of %d characters exceeds message limit of %d",
                fragment_length, max_length)
        current.fragments.append(fragment)
        current_length += fragment_length

    blocks.append(current)
    return blocks
