import requests
from office_config import ES_URL, SOURCE_INDEX, API_KEY_B64, OFFICE_PROGRAM_QUERY, HTTP_TIMEOUT
from office_errors import FetchError


def get_elastic_installs(es_url=None, index=None, api_key_b64=None, query=OFFICE_PROGRAM_QUERY):
    """
    Pull osquery results for the Office program query from Elastic.
    Returns [{"computer_name", "computer_id", "version", "timestamp"}, ...],
    one row per agent (first document wins).
    """
    es_url = es_url or ES_URL
    index = index or SOURCE_INDEX
    api_key_b64 = api_key_b64 or API_KEY_B64
    if not es_url or not index:
        raise FetchError("ES_URL and SOURCE_INDEX must be set")

    url = f"{es_url.rstrip('/')}/{index}/_search"
    params = {
        "size": 10000,
        "filter_path": "hits.hits"
    }
    headers = {"Authorization": f"ApiKey {api_key_b64}"} if api_key_b64 else {}

    try:
        resp = requests.get(url, params=params, headers=headers, timeout=HTTP_TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Elastic HTTP error: {e}") from e
    except ValueError as e:
        raise FetchError("Failed to parse Elastic JSON.") from e

    hits = (data.get("hits") or {}).get("hits", [])
    print(f"[INFO] Retrieved {len(hits)} osquery docs")

    rows = []
    seen_agents = set()

    for doc in hits:
        src = doc.get("_source", {}) or {}
        action = src.get("action_data") or {}
        agent = src.get("agent") or {}
        agent_name = agent.get("name")

        if action.get("query") != query:
            continue
        if agent_name in seen_agents:
            continue
        seen_agents.add(agent_name)
        osquery = src.get("osquery") or {}

        rows.append({
            "computer_name": agent_name,
            "computer_id": agent.get("id"),
            "version": osquery.get("version"),   # e.g., "16.0.14701.20164"
            "timestamp": src.get("@timestamp")
        })

    return rows
