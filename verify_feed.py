"""Run against a live run_server.py to inspect what a feed contains.

Usage:
    python verify_feed.py go [http://localhost:8000]
"""
import re
import sys

import feedparser

HTML_TAG = re.compile(r"<[^>]+>")


def verify(language: str, base_url: str = "http://localhost:8000"):
    url = f"{base_url.rstrip('/')}/{language}"
    feed = feedparser.parse(url)

    status = feed.get("status")
    if status is None:
        print(f"ERROR: could not reach {url}: {feed.get('bozo_exception')}")
        return False
    if status != 200:
        print(f"ERROR: {url} answered HTTP {status}")
        return False
    if feed.bozo:
        print(f"WARNING: feed has parsing issues: {feed.bozo_exception}")

    print(f"\n{'='*50}")
    print(f"{feed.feed.get('title', '(untitled)')}")
    print(f"{'='*50}")
    print(f"Link:          {feed.feed.get('link', '')}")
    print(f"Last updated:  {feed.feed.get('updated', 'never')}")
    print(f"Entries:       {len(feed.entries)}")

    if not feed.entries:
        print("\nNo releases yet. The worker may still be on its first cycle.")
        return True

    ids = [e.get("id", "") for e in feed.entries]
    if len(set(ids)) != len(ids):
        print("\nWARNING: duplicate entry ids in feed")

    print()
    for entry in feed.entries:
        text = HTML_TAG.sub(" ", entry.get("summary", ""))
        text = re.sub(r"\s+", " ", text).strip()
        print(f"  {entry.get('published', '?'):32} {entry.get('title', '')}")
        print(f"  {'':32} by {entry.get('author', '?')}: {text[:80]}")
    return True


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python verify_feed.py <language> [base_url]")
        sys.exit(1)
    ok = verify(*sys.argv[1:3])
    sys.exit(0 if ok else 1)
