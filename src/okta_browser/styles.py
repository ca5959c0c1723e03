"""CSS styles for the Okta user browser."""

APP_CSS = """
Screen {
    padding: 1 2;
}

.hidden {
    display: none;
}

#browse-container {
    height: 100%;
}

#list-title {
    height: 1;
    color: $text;
}

#entry-list {
    height: 1fr;
    border: none;
    padding: 0;
}

#filter-bar {
    height: auto;
}

#status-bar {
    height: 1;
}

#profile-pane {
    height: 100%;
    scrollbar-gutter: stable;
    scrollbar-size-vertical: 2;
}
"""
