"""
Smoke test for the bot's web dashboard: GETs each endpoint and prints pass/fail.
"""
import argparse
import json
import os
import sys

import requests

BASE_URL = os.environ.get("DASHBOARD_URL", "http://localhost:10000")
TIMEOUT = 5

API_ENDPOINTS = [
    ("/api/health", "Health Check"),
    ("/api/stats", "Bot Statistics"),
    ("/api/commands", "Commands List"),
    ("/api/servers", "Servers List"),
    ("/api/analytics", "Analytics Data"),
    ("/api/botinfo", "Bot Information"),
    ("/api/status", "System Status"),
]


def check_endpoint(base_url, endpoint, description):
    """Check a JSON endpoint"""
    print(f"🔍 Testing {description}...")
    try:
        response = requests.get(f"{base_url}{endpoint}", timeout=TIMEOUT)
        if response.ok:
            print(f"✅ {description} - Status: {response.status_code}")
            try:
                preview = json.dumps(response.json(), indent=2)[:200]
            except ValueError:
                preview = response.text[:200]
            print(f"   Data: {preview}...")
            return True
        print(f"❌ {description} - Status: {response.status_code}")
        return False
    except requests.exceptions.ConnectionError:
        print(f"❌ {description} - Cannot connect to server. Is it running?")
        return False
    except requests.exceptions.RequestException as e:
        print(f"❌ {description} - Error: {e}")
        return False
    finally:
        print("")


def check_main_page(base_url):
    print("🔍 Testing Main Page...")
    try:
        response = requests.get(f"{base_url}/", timeout=TIMEOUT)
    except requests.exceptions.RequestException as e:
        print(f"❌ Main Page - Error: {e}")
        return False
    if not response.ok:
        print(f"❌ Main Page - Status: {response.status_code}")
        return False
    print(f"✅ Main Page - Status: {response.status_code} OK")
    print(f"   Content-Type: {response.headers.get('content-type')}")
    return True


def run_checks(base_url=BASE_URL):
    base_url = base_url.rstrip("/")
    print(f"🚀 Testing dashboard at {base_url}...\n")

    results = [check_endpoint(base_url, path, desc) for path, desc in API_ENDPOINTS]
    results.append(check_main_page(base_url))

    passed = sum(results)
    print(f"\n🎉 Server testing complete! {passed}/{len(results)} passed")
    print(f"📊 Dashboard should be available at: {base_url}")
    return all(results)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Ping the dashboard endpoints")
    parser.add_argument("--base-url", default=BASE_URL, help="dashboard root URL")
    args = parser.parse_args(argv)
    return 0 if run_checks(args.base_url) else 1


if __name__ == "__main__":
    sys.exit(main())
