from typing import Any, Dict, List

# Each entry is created once: skipped when a row whose ``key`` column equals
# ``value`` already exists. Products name their category by slug and coupons
# expire relative to the seeding time.
default_list: List[Dict[str, Any]] = [
    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------
    {
        "object_name": "CATEGORY",
        "key": "slug",
        "value": "electronics",
        "data": {
            "name": "Electronics",
            "description": "Latest electronic devices and gadgets",
            "image": "https://images.unsplash.com/photo-1498049794561-7780e7231661?w=400",
        },
    },
    {
        "object_name": "CATEGORY",
        "key": "slug",
        "value": "clothing",
        "data": {
            "name": "Clothing",
            "description": "Fashion and apparel for all occasions",
            "image": "https://images.unsplash.com/photo-1441986300917-64674bd600d8?w=400",
        },
    },
    {
        "object_name": "CATEGORY",
        "key": "slug",
        "value": "home-garden",
        "data": {
            "name": "Home & Garden",
            "description": "Everything for your home and garden",
            "image": "https://images.unsplash.com/photo-1586023492125-27b2c045efd7?w=400",
        },
    },
    {
        "object_name": "CATEGORY",
        "key": "slug",
        "value": "sports",
        "data": {
            "name": "Sports",
            "description": "Sports equipment and accessories",
            "image": "https://images.unsplash.com/photo-1571019613454-1cb2f99b2d8b?w=400",
        },
    },
    {
        "object_name": "CATEGORY",
        "key": "slug",
        "value": "books",
        "data": {
            "name": "Books",
            "description": "Books and educational materials",
            "image": "https://images.unsplash.com/photo-1481627834876-b7833e8f5570?w=400",
        },
    },
    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "iphone-15-pro",
        "data": {
            "name": "iPhone 15 Pro",
            "description": "The latest iPhone with titanium design and advanced camera system",
            "price": "999.00",
            "original_price": "1099.00",
            "sku": "IPHONE15PRO-128",
            "category": "electronics",
            "stock": 50,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1592750475338-74b7b21085ab?w=500"],
            "tags": ["smartphone", "apple", "premium"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "samsung-galaxy-s24",
        "data": {
            "name": "Samsung Galaxy S24",
            "description": "Powerful Android smartphone with AI features",
            "price": "849.00",
            "original_price": "899.00",
            "sku": "GALAXY-S24-256",
            "category": "electronics",
            "stock": 35,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1610945265064-0e34e5519bbf?w=500"],
            "tags": ["smartphone", "samsung", "android"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "macbook-pro-14",
        "data": {
            "name": "MacBook Pro 14\"",
            "description": "Professional laptop with M3 chip for demanding workflows",
            "price": "1999.00",
            "original_price": "2199.00",
            "sku": "MBP14-M3-512",
            "category": "electronics",
            "stock": 25,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1517336714731-489689fd1ca8?w=500"],
            "tags": ["laptop", "apple", "professional"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "sony-wh-1000xm5",
        "data": {
            "name": "Sony WH-1000XM5",
            "description": "Industry-leading noise canceling wireless headphones",
            "price": "329.00",
            "original_price": "399.00",
            "sku": "SONY-WH1000XM5",
            "category": "electronics",
            "stock": 40,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1583394838336-acd977736f90?w=500"],
            "tags": ["headphones", "sony", "wireless"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "classic-denim-jacket",
        "data": {
            "name": "Classic Denim Jacket",
            "description": "Timeless denim jacket perfect for any casual outfit",
            "price": "89.00",
            "original_price": "120.00",
            "sku": "DENIM-JACKET-M",
            "category": "clothing",
            "stock": 60,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1544966503-7cc5ac882d5f?w=500"],
            "tags": ["jacket", "denim", "casual"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "premium-cotton-tshirt",
        "data": {
            "name": "Premium Cotton T-Shirt",
            "description": "Soft, comfortable cotton t-shirt in various colors",
            "price": "29.00",
            "original_price": "39.00",
            "sku": "COTTON-TEE-L",
            "category": "clothing",
            "stock": 100,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?w=500"],
            "tags": ["t-shirt", "cotton", "basic"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "running-sneakers",
        "data": {
            "name": "Running Sneakers",
            "description": "Lightweight running shoes for optimal performance",
            "price": "129.00",
            "original_price": "159.00",
            "sku": "RUN-SNEAKER-42",
            "category": "clothing",
            "stock": 45,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=500"],
            "tags": ["shoes", "running", "athletic"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "smart-led-bulb-set",
        "data": {
            "name": "Smart LED Bulb Set",
            "description": "WiFi-enabled smart bulbs with color changing capabilities",
            "price": "49.00",
            "original_price": "69.00",
            "sku": "SMART-LED-4PACK",
            "category": "home-garden",
            "stock": 80,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1558618047-3c8c76ca7d13?w=500"],
            "tags": ["smart home", "lighting", "wifi"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "ceramic-plant-pot",
        "data": {
            "name": "Ceramic Plant Pot",
            "description": "Beautiful ceramic pot perfect for indoor plants",
            "price": "24.00",
            "original_price": "32.00",
            "sku": "CERAMIC-POT-MED",
            "category": "home-garden",
            "stock": 120,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1485955900006-10f4d324d411?w=500"],
            "tags": ["pot", "ceramic", "plants"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "yoga-mat-pro",
        "data": {
            "name": "Yoga Mat Pro",
            "description": "Professional-grade yoga mat with superior grip",
            "price": "79.00",
            "original_price": "99.00",
            "sku": "YOGA-MAT-PRO",
            "category": "sports",
            "stock": 55,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1544367567-0f2fcb009e0b?w=500"],
            "tags": ["yoga", "mat", "fitness"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "resistance-band-set",
        "data": {
            "name": "Resistance Band Set",
            "description": "Complete set of resistance bands for home workouts",
            "price": "39.00",
            "original_price": "55.00",
            "sku": "RESIST-BAND-SET",
            "category": "sports",
            "stock": 70,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1598300042247-d088f8ab3a91?w=500"],
            "tags": ["resistance", "bands", "workout"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "javascript-definitive-guide",
        "data": {
            "name": "JavaScript: The Definitive Guide",
            "description": "Comprehensive guide to JavaScript programming",
            "price": "59.00",
            "original_price": "69.00",
            "sku": "JS-GUIDE-7ED",
            "category": "books",
            "stock": 30,
            "is_featured": False,
            "images": ["https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d?w=500"],
            "tags": ["programming", "javascript", "guide"],
        },
    },
    {
        "object_name": "PRODUCT",
        "key": "slug",
        "value": "art-of-clean-code",
        "data": {
            "name": "The Art of Clean Code",
            "description": "Best practices for writing maintainable code",
            "price": "45.00",
            "original_price": "52.00",
            "sku": "CLEAN-CODE-2ED",
            "category": "books",
            "stock": 25,
            "is_featured": True,
            "images": ["https://images.unsplash.com/photo-1532012197267-da84d127e765?w=500"],
            "tags": ["programming", "clean code", "best practices"],
        },
    },
    # ------------------------------------------------------------------
    # Coupons
    # ------------------------------------------------------------------
    {
        "object_name": "COUPON",
        "key": "code",
        "value": "WELCOME10",
        "data": {
            "description": "10% off for new customers",
            "discount_type": "percentage",
            "discount_value": "10.00",
            "min_order_amount": "50.00",
            "max_uses": 100,
            "expires_in_days": 30,
        },
    },
    {
        "object_name": "COUPON",
        "key": "code",
        "value": "SAVE20",
        "data": {
            "description": "$20 off orders over $100",
            "discount_type": "fixed",
            "discount_value": "20.00",
            "min_order_amount": "100.00",
            "max_uses": 50,
            "expires_in_days": 15,
        },
    },
    {
        "object_name": "COUPON",
        "key": "code",
        "value": "FREESHIP",
        "data": {
            "description": "Free shipping on any order",
            "discount_type": "shipping",
            "discount_value": "0.00",
            "min_order_amount": "0.00",
            "max_uses": None,
            "expires_in_days": 60,
        },
    },
    # ------------------------------------------------------------------
    # Sample reviewers and their reviews
    # ------------------------------------------------------------------
    {
        "object_name": "USER",
        "key": "id",
        "value": "sample-user-1",
        "data": {"first_name": "Sam", "last_name": "Reviewer"},
    },
    {
        "object_name": "USER",
        "key": "id",
        "value": "sample-user-2",
        "data": {"first_name": "Alex", "last_name": "Reviewer"},
    },
    {
        "object_name": "USER",
        "key": "id",
        "value": "sample-user-3",
        "data": {"first_name": "Jo", "last_name": "Reviewer"},
    },
    {
        "object_name": "USER",
        "key": "id",
        "value": "sample-user-4",
        "data": {"first_name": "Kim", "last_name": "Reviewer"},
    },
    {
        "object_name": "REVIEW",
        "key": "title",
        "value": "Amazing phone!",
        "data": {
            "product": "iphone-15-pro",
            "user_id": "sample-user-1",
            "rating": 5,
            "comment": "The camera quality is incredible and the titanium build feels premium.",
            "is_verified": True,
        },
    },
    {
        "object_name": "REVIEW",
        "key": "title",
        "value": "Great upgrade",
        "data": {
            "product": "iphone-15-pro",
            "user_id": "sample-user-2",
            "rating": 4,
            "comment": "Noticeable improvement from my old phone. Battery life is excellent.",
            "is_verified": True,
        },
    },
    {
        "object_name": "REVIEW",
        "key": "title",
        "value": "Perfect for development",
        "data": {
            "product": "macbook-pro-14",
            "user_id": "sample-user-3",
            "rating": 5,
            "comment": "Blazing fast performance for coding and design work. Highly recommended!",
            "is_verified": True,
        },
    },
    {
        "object_name": "REVIEW",
        "key": "title",
        "value": "Great quality",
        "data": {
            "product": "classic-denim-jacket",
            "user_id": "sample-user-4",
            "rating": 4,
            "comment": "Fits well and looks stylish. Good value for the price.",
            "is_verified": False,
        },
    },
]
