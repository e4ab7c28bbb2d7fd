from populate_db import DEMO_PRODUCTS, load_all_data


async def test_demo_catalog_merges_repeated_title(product_store, capsys):
    results = await load_all_data(product_store)

    assert len(results) == len(DEMO_PRODUCTS)
    # The repeated "Producto 1" restocks the first record
    assert results[-1].id == 1
    assert results[-1].stock == 15

    products = await product_store.get_all_products()
    assert [p.id for p in products] == [1, 2, 3, 4, 5]
    assert "Product added or updated" in capsys.readouterr().out
