"""
Example API client for the Mongo DB Facade Service.

This example demonstrates how to use the service's REST API to create
a collection, insert documents and query them back. Start the service
first with ``python main.py``.
"""

import requests


def main() -> None:
    """Example usage of the Mongo DB Facade Service API."""
    api_url = "http://localhost:8000"
    database = "examples"
    collection = "products"

    print("Mongo DB Facade Service API Example\n")

    # Check if the API is running
    try:
        response = requests.get(f"{api_url}/health")
        if response.status_code != 200:
            print(f"API is not available at {api_url}")
            return

        print(f"API is running in {response.json()['mode']} mode")
    except requests.exceptions.RequestException:
        print(f"API is not available at {api_url}")
        return

    collection_url = f"{api_url}/databases/{database}/collections/{collection}"

    response = requests.put(collection_url)
    response.raise_for_status()
    print(f"Using collection {response.json()['full_name']}")

    products = [
        {"name": "Smartphone", "price": 999.99, "in_stock": True},
        {"name": "Headphones", "price": 199.0, "in_stock": False},
    ]
    response = requests.post(f"{collection_url}/documents", json={"documents": products})
    response.raise_for_status()
    print(f"Inserted {response.json()['inserted']} products")

    response = requests.post(f"{collection_url}/query", json={"filter": {"in_stock": True}})
    response.raise_for_status()
    print("\nProducts in stock:")
    for product in response.json()["documents"]:
        print(f"  {product['name']}: {product['price']}")

    response = requests.get(f"{api_url}/databases/{database}/collections")
    response.raise_for_status()
    print(f"\nCollections in {database}: {', '.join(response.json()['collections'])}")


if __name__ == "__main__":
    main()
