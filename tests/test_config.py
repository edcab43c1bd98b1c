import pytest
from pydantic import ValidationError

from swipeledger import Book, SeedData, default_seed
from swipeledger.config import Designations, WalletSeed


def test_default_seed_is_balanced():
    seed = default_seed()
    assert len(seed.accounts) == 15
    assert Book.from_seed(seed).generate_balance_sheet().is_balanced()


def test_seed_save_and_load(tmp_path):
    path = tmp_path / "seed.json"
    seed = default_seed()
    seed.save(path)
    loaded = SeedData.load(path)
    assert loaded.accounts == seed.accounts
    assert loaded.designations == seed.designations
    assert Book.from_seed(loaded).get_account_balance("A002") == 1_200_000


def test_seed_save_refuses_overwrite(tmp_path):
    path = tmp_path / "seed.json"
    default_seed().save(path)
    with pytest.raises(FileExistsError):
        default_seed().save(path)
    default_seed().save(path, allow_overwrite=True)


def test_designation_must_exist():
    seed = default_seed()
    with pytest.raises(ValidationError):
        SeedData(accounts=seed.accounts, designations=Designations(payables="L999"))


def test_wallet_needs_asset_account():
    seed = default_seed()
    wallet = WalletSeed(name="Bad", ledger_account_id="L001", pgs=seed.wallets[0].pgs)
    with pytest.raises(ValidationError):
        SeedData(accounts=seed.accounts, wallets=[wallet])


def test_seed_wallet_without_id_gets_next_id():
    seed = default_seed()
    wallet = WalletSeed(name="Spare", ledger_account_id="A003", pgs=seed.wallets[1].pgs)
    book = Book.from_seed(seed.model_copy(update={"wallets": seed.wallets + [wallet]}))
    assert book.wallets["W003"].name == "Spare"
