# database/models.py
from sqlalchemy import Column, Float, Integer, String, Text

# Important: must match Base from db_setup.py
from .db_setup import Base

# Column names follow the Supabase tables exactly (including the spaced
# ledger headers), so rows read from the mirror validate like store rows.


class TransactionRow(Base):
    """Ledger line, mirror of `transactions`."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    item_date = Column("Item date", String(10), nullable=False)
    property_address = Column("Property address", String(200))
    item_description = Column("Item description", String(300))
    item_type = Column("Item type", String(100))
    item_amount = Column("Item amount inc VAT", Float)

    def __repr__(self):
        return f"<TransactionRow(id={self.id}, date={self.item_date}, type={self.item_type}, amount={self.item_amount})>"


class PropertyRow(Base):
    """Mirror of `properties_master`."""
    __tablename__ = "properties_master"

    property_id = Column(String(20), primary_key=True)
    address = Column(String(200), nullable=False)
    city = Column(String(100))

    purchase_price = Column(Float)
    deposit_pct_phase1 = Column(Float)
    cash_deposit_phase1 = Column(Float)
    stamp_duty = Column(Float)
    solicitor_fees = Column(Float)
    agent_fee = Column(Float)
    renovation_cost = Column(Float)
    renovation_mgmt_fee = Column(Float)
    mortgage_rate_phase1 = Column(Float)

    revaluation_estimate = Column(Float)
    market_value_est = Column(Float)
    market_value_basis = Column(String(200))

    deposit_pct_phase2 = Column(Float)
    equity_release = Column(Float)
    mortgage_rate_phase2 = Column(Float)
    annual_rent_phase2 = Column(Float)
    bills_phase2 = Column(Float)
    management_phase2 = Column(Float)
    provision_costs_phase2 = Column(Float)
    provision_voids_phase2 = Column(Float)
    beds_phase2 = Column(Integer)
    notes_phase2 = Column(Text, nullable=True)
    property_link = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<PropertyRow(property_id={self.property_id}, address={self.address})>"


class CapitalTransactionRow(Base):
    """Mirror of `capital_transactions`."""
    __tablename__ = "capital_transactions"

    transaction_id = Column(String(20), primary_key=True)
    property_id = Column(String(20), nullable=False)
    date = Column(String(10), nullable=False)
    type = Column(String(50))
    description = Column(String(300))
    amount = Column(Float)


class ScenarioRow(Base):
    """Mirror of `scenarios`."""
    __tablename__ = "scenarios"

    scenario_id = Column(String(20), primary_key=True)
    property_id = Column(String(20), nullable=False)
    scenario_label = Column(String(100))
    revaluation_estimate = Column(Float)
    deposit_pct_phase2 = Column(Float)
    equity_release = Column(Float)
    mortgage_rate_phase2 = Column(Float)
    annual_rent_phase2 = Column(Float)


class ValuationRow(Base):
    """Mirror of `valuations`."""
    __tablename__ = "valuations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    property_id = Column(String(20), nullable=True)
    date = Column(String(10), nullable=False)
    value = Column(Float)
    source = Column(String(100))
    address = Column(String(200))
