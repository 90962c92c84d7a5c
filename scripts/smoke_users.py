import requests
import json
import sys

BASE_URL = "http://localhost:8000/api/v1/users/"

def show(label, response):
    print(f"{label}: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)

def run_smoke_test(email="smoke@example.com"):
    # 1. Create an admin account
    payload = {
        "username": "smoke",
        "password": "password123",
        "email": email,
        "type": "admin",
    }
    print("Sending POST request to:", BASE_URL)
    response = requests.post(BASE_URL, json=payload)
    show("Create", response)
    if response.status_code not in [200, 201]:
        print("Create failed, aborting.")
        return False

    # 2. It must be listed
    response = requests.get(BASE_URL)
    show("List", response)
    if email not in [u["email"] for u in response.json()]:
        print("Created account missing from listing!")
        return False

    # 3. Change the password
    response = requests.put(BASE_URL, json={"email": email, "password": "password456"})
    show("Update password", response)

    # 4. Delete, then delete again (second one must fail with 400)
    response = requests.delete(BASE_URL, json={"email": email})
    show("Delete", response)
    response = requests.delete(BASE_URL, json={"email": email})
    show("Delete again", response)
    if response.status_code != 400:
        print("Expected 400 on second delete!")
        return False

    # 5. Unsupported method
    response = requests.patch(BASE_URL, json={"email": email})
    print("PATCH:", response.status_code, response.headers.get("Allow"), response.text)
    return response.status_code == 405

if __name__ == "__main__":
    try:
        ok = run_smoke_test(*sys.argv[1:2])
    except requests.ConnectionError as e:
        print("Request failed:", e)
        ok = False
    sys.exit(0 if ok else 1)
