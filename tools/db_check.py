import sqlite3
import sys

DB = sys.argv[1] if len(sys.argv) > 1 else "dev.db"
USER_ID = sys.argv[2] if len(sys.argv) > 2 else None

conn = sqlite3.connect(DB)
cur = conn.cursor()

print("=== Recent Orders ===")
if USER_ID:
    cur.execute(
        "SELECT id, user_id, status, subtotal, discount, tax, shipping, total, created_at FROM orders WHERE user_id=? ORDER BY created_at DESC LIMIT 20",
        (USER_ID,),
    )
else:
    cur.execute(
        "SELECT id, user_id, status, subtotal, discount, tax, shipping, total, created_at FROM orders ORDER BY created_at DESC LIMIT 20"
    )
orders = cur.fetchall()
for r in orders:
    print(r)
    cur.execute(
        "SELECT product_id, name, variant, quantity, price FROM order_items WHERE order_id=?",
        (r[0],),
    )
    for line in cur.fetchall():
        print("    ", line)

print("\n=== Admins ===")
cur.execute("SELECT id, email, name, role, created_at FROM admins ORDER BY created_at DESC")
for r in cur.fetchall():
    print(r)

print("\n=== Products ===")
cur.execute("SELECT id, slug, price, stock, active FROM products ORDER BY name")
for r in cur.fetchall():
    print(r)

conn.close()
