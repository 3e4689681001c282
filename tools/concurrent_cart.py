import argparse
import concurrent.futures
import json
import os
import sys

import requests

BASE = os.environ.get("STOREFRONT_BASE", "http://127.0.0.1:8000")


def add_task(i, cart_uuid, product_id, qty):
    try:
        r = requests.post(
            f"{BASE}/api/cart/items",
            json={"product_id": product_id, "quantity": qty},
            cookies={"cart_uuid": cart_uuid},
            timeout=10,
        )
        return (i, "add", r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "add", "ERR", str(e))


def coupon_task(i, cart_uuid, code):
    try:
        r = requests.post(
            f"{BASE}/api/cart/coupon",
            json={"code": code},
            cookies={"cart_uuid": cart_uuid},
            timeout=10,
        )
        return (i, "coupon", r.status_code, r.text)
    except requests.RequestException as e:
        return (i, "coupon", "ERR", str(e))


def main():
    parser = argparse.ArgumentParser(description="Hit one guest cart from many threads at once")
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--product-id", type=int, default=1)
    parser.add_argument("--qty", type=int, default=1)
    parser.add_argument("--code", default="SAVE10")
    args = parser.parse_args()

    r = requests.get(f"{BASE}/api/cart", timeout=10)
    r.raise_for_status()
    cart_uuid = r.json()["cart_uuid"]
    print(f"cart={cart_uuid} workers={args.workers}")

    with concurrent.futures.ThreadPoolExecutor(max_workers=args.workers) as ex:
        futures = [ex.submit(add_task, i, cart_uuid, args.product_id, args.qty) for i in range(args.workers)]
        for f in futures:
            print(f.result()[:3])

    with concurrent.futures.ThreadPoolExecutor(max_workers=args.workers) as ex:
        futures = [ex.submit(coupon_task, i, cart_uuid, args.code) for i in range(args.workers)]
        statuses = [f.result()[2] for f in futures]
        print("coupon statuses:", statuses)

    final = requests.get(f"{BASE}/api/cart", cookies={"cart_uuid": cart_uuid}, timeout=10).json()
    print(json.dumps(final, indent=2))
    if statuses.count(200) != 1:
        print("expected exactly one coupon application to succeed")
        sys.exit(1)


if __name__ == "__main__":
    main()
