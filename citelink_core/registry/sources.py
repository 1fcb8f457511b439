# Source blocks attached to every link entry, keyed by link source name.

SOURCES: dict[str, dict] = {
    "usgpo": {
        "name": "U.S. Government Publishing Office",
        "abbreviation": "US GPO",
        "link": "https://www.govinfo.gov",
        "authoritative": True,
    },
    "govtrack": {
        "name": "GovTrack.us",
        "abbreviation": "GovTrack.us",
        "link": "https://www.govtrack.us/",
        "authoritative": False,
    },
    "house": {
        "name": "Office of the Law Revision Counsel of the United States House of Representatives",
        "abbreviation": "House OLRC",
        "link": "https://uscode.house.gov/",
        "authoritative": True,
    },
    "cornell_lii": {
        "name": "Cornell Legal Information Institute",
        "abbreviation": "Cornell LII",
        "link": "https://www.law.cornell.edu/",
        "authoritative": False,
    },
    "courtlistener": {
        "name": "Court Listener",
        "abbreviation": "CL",
        "link": "https://www.courtlistener.com",
        "authoritative": False,
    },
    "legisworks": {
        "name": "Legisworks",
        "abbreviation": "Legisworks",
        "link": "https://github.com/unitedstates/legisworks-historical-statutes",
        "authoritative": False,
    },
}


def link_entry(source: str, **links) -> dict:
    """Build a link entry: the source block plus the non-empty link kinds."""
    entry = {"source": dict(SOURCES[source])}
    entry.update({kind: url for kind, url in links.items() if url})
    return entry
