"""
Demo catalog and ledger loaded into an empty database on startup.
"""
from sqlalchemy.orm import Session

from storefront.models.category import Category
from storefront.models.product import Product
from storefront.models.transaction import Transaction

CATEGORIES = [
    "Undangan Pernikahan",
    "Office",
    "Promosi",
    "Packaging",
    "Buku",
    "Digital",
]

PRODUCTS = [
    {
        "id": "1",
        "name": "Undangan Hardcover Mewah",
        "category": "Undangan Pernikahan",
        "price": 5000,
        "display_price": "Rp 5.000 / pcs",
        "image": "https://picsum.photos/400/300?random=1",
        "description": "Undangan tebal dengan foil emas dan amplop eksklusif. Pilihan tepat untuk acara formal.",
        "stock": 1500,
    },
    {
        "id": "2",
        "name": "Undangan Softcover Floral",
        "category": "Undangan Pernikahan",
        "price": 2500,
        "display_price": "Rp 2.500 / pcs",
        "image": "https://picsum.photos/400/300?random=2",
        "description": "Desain minimalis dengan motif bunga yang manis. Bahan art carton berkualitas.",
        "stock": 2000,
    },
    {
        "id": "3",
        "name": "Kartu Nama Bisnis",
        "category": "Office",
        "price": 35000,
        "display_price": "Rp 35.000 / Box",
        "image": "https://picsum.photos/400/300?random=3",
        "description": "Cetak kartu nama 1 atau 2 sisi dengan laminasi doff atau glossy. Isi 100 pcs.",
        "stock": 50,
    },
    {
        "id": "4",
        "name": "X-Banner Standing",
        "category": "Promosi",
        "price": 85000,
        "display_price": "Rp 85.000",
        "image": "https://picsum.photos/400/300?random=4",
        "description": "Banner promosi lengkap dengan tiang penyangga. Praktis dan mudah dibawa.",
        "stock": 12,
    },
    {
        "id": "5",
        "name": "Cetak Sticker Label",
        "category": "Packaging",
        "price": 15000,
        "display_price": "Rp 15.000 / Lembar A3",
        "image": "https://picsum.photos/400/300?random=5",
        "description": "Sticker kromo atau vinyl anti air. Sudah termasuk cutting sesuai pola.",
        "stock": 500,
    },
    {
        "id": "6",
        "name": "Buku Yasin Custom",
        "category": "Buku",
        "price": 12000,
        "display_price": "Rp 12.000 / pcs",
        "image": "https://picsum.photos/400/300?random=6",
        "description": "Buku Yasin dengan cover custom foto almarhum, tersedia hardcover dan softcover.",
        "stock": 75,
    },
]

# Records entered before payments were tracked carry no paid_amount; "settled"
# marks the ones that were paid in full.
TRANSACTIONS = [
    {
        "id": "TRX-001",
        "date": "2024-05-01",
        "customer_name": "Budi Santoso",
        "customer_address": "Jl. Melati No. 45, Jakarta Selatan",
        "total_amount": 500000,
        "settled": True,
        "items": [{"name": "Undangan Hardcover Mewah", "quantity": 100, "price": 5000}],
    },
    {
        "id": "TRX-002",
        "date": "2024-05-02",
        "customer_name": "Siti Aminah",
        "customer_address": "Komplek Permata Hijau Blok A2",
        "total_amount": 175000,
        "settled": True,
        "items": [{"name": "Kartu Nama Bisnis", "quantity": 5, "price": 35000}],
    },
    {
        "id": "TRX-003",
        "date": "2024-05-03",
        "customer_name": "PT Maju Jaya",
        "customer_address": "Gedung Cyber Lt. 2, Kuningan",
        "total_amount": 850000,
        "settled": False,
        "items": [{"name": "X-Banner Standing", "quantity": 10, "price": 85000}],
    },
    {
        "id": "TRX-004",
        "date": "2024-05-03",
        "customer_name": "Rian & Rini",
        "customer_address": "Jl. Kenanga No. 10, Bandung",
        "total_amount": 2500000,
        "settled": True,
        "items": [{"name": "Undangan Softcover Floral", "quantity": 1000, "price": 2500}],
    },
    {
        "id": "TRX-005",
        "date": "2024-05-04",
        "customer_name": "Keluarga Besar H. Ahmad",
        "customer_address": "Jl. Raya Bogor KM 25",
        "total_amount": 600000,
        "settled": True,
        "items": [{"name": "Buku Yasin Custom", "quantity": 50, "price": 12000}],
    },
    {
        "id": "TRX-006",
        "date": "2024-05-05",
        "customer_name": "Doni Pratama",
        "customer_address": "Jl. Sudirman No. 88",
        "total_amount": 3000000,
        "paid_amount": 1000000,
        "items": [{"name": "Undangan Hardcover Premium", "quantity": 200, "price": 15000}],
    },
    {
        "id": "TRX-007",
        "date": "2024-06-06",
        "customer_name": "Sari & Bimo",
        "customer_address": "Komp. Gading Serpong",
        "total_amount": 1500000,
        "paid_amount": 750000,
        "items": [{"name": "Undangan Softcover Custom", "quantity": 500, "price": 3000}],
    },
]


def seed_demo_data(s: Session) -> int:
    """Insert whatever demo rows are missing. Idempotent; returns the number of rows added."""
    created = 0
    existing_categories = {c.name for c in s.query(Category).all()}
    for name in CATEGORIES:
        if name not in existing_categories:
            s.add(Category(name=name))
            created += 1

    for ent in PRODUCTS:
        if not s.get(Product, ent["id"]):
            s.add(Product(**ent))
            created += 1

    for ent in TRANSACTIONS:
        if s.query(Transaction).filter(Transaction.id == ent["id"]).first():
            continue
        s.add(
            Transaction.new(
                id=ent["id"],
                date=ent["date"],
                customer_name=ent["customer_name"],
                customer_address=ent.get("customer_address"),
                items=ent["items"],
                total_amount=ent["total_amount"],
                paid_amount=ent.get("paid_amount"),
                settled=ent.get("settled", False),
            )
        )
        created += 1
    s.flush()
    return created
