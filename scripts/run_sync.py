import json
import httpx


def prompt(text: str, default: str | None = None) -> str:
    hint = f" [{default}]" if default is not None else ""
    value = input(f"{text}{hint}: ").strip()
    return value or (default or "")


def prompt_yes_no(text: str, default: bool = False) -> bool:
    suffix = "Y/n" if default else "y/N"
    value = input(f"{text} ({suffix}): ").strip().lower()
    if not value:
        return default
    return value in {"y", "yes"}


def call_api(client: httpx.Client, method: str, path: str, params: dict | None = None):
    print(f"-> {method} {path} {params or ''}".strip())
    response = client.request(method, path, params=params, timeout=600)
    response.raise_for_status()
    data = response.json()
    print(f"   done: {json.dumps(data, indent=2)}")
    return data


def build_sync_params(code: str, season_code: str, games: str, skip_boxscores: bool) -> dict:
    params = {"code": code.upper()}
    if season_code:
        params["seasonCode"] = season_code
    if games:
        params["games"] = games
    if skip_boxscores:
        params["skipBoxscores"] = "true"
    return params


def main():
    print("bball-api sync runner")
    base_url = prompt("API base URL", "http://127.0.0.1:8000")
    code = prompt("Competition code", "E")
    season_code = prompt("Season code (empty to build from code + default season)", "")
    games = prompt("Game numbers, comma separated (empty for all)", "")
    skip_boxscores = prompt_yes_no("Skip boxscores", False)

    with httpx.Client(base_url=base_url) as client:
        call_api(client, "GET", "/api/health")
        print("Syncing games...")
        result = call_api(
            client,
            "GET",
            "/api/sync",
            build_sync_params(code, season_code, games, skip_boxscores),
        )

    errors = (result.get("games") or {}).get("errors") or []
    boxscores = result.get("boxscores")
    if isinstance(boxscores, dict):
        errors += boxscores.get("errors") or []
    if errors:
        print(f"Finished with {len(errors)} reported error(s); rerun to retry them.")
    else:
        print("Sync complete.")


if __name__ == "__main__":
    main()
