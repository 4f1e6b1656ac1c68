# order_management/models/customer_model.py
from sqlalchemy import Boolean, Column, DateTime, Integer, Numeric
from sqlalchemy.types import Unicode

from order_management.database.session import Base


class Customer(Base):
    __tablename__ = "Cust_Sup"

    cust_sup_id         = Column("Cust_Sup_id", Integer, primary_key=True, autoincrement=True)
    name_english        = Column("Name_e", Unicode(100), nullable=False)
    name_arabic         = Column("Name_a", Unicode(100))
    # uniqueness is checked by the service before insert, not by the table
    customer_number     = Column("Cust_Sup_no", Unicode(50), index=True)
    country_id          = Column("Country_id", Unicode(50))
    city_id             = Column("City_id", Unicode(50))
    discount_percent    = Column("Discount_Percent", Numeric(5, 2))
    contact_person      = Column("Contact_Person", Unicode(100))
    address1            = Column("Address", Unicode(255))
    phone1              = Column("Phone1", Unicode(20))
    phone2              = Column("Phone2", Unicode(20))
    fax                 = Column("Fax", Unicode(20))
    email               = Column("E_mail", Unicode(100))
    website             = Column("Web_site", Unicode(255))
    zip_code            = Column("Zip_Code", Unicode(20))
    po_box              = Column("P_O_Box", Unicode(20))
    is_release_tax      = Column("Is_Release_Tax", Boolean, nullable=False, default=False)
    release_number      = Column("Release_No", Unicode(50))
    release_expiry_date = Column("Release_Expiry_Date", DateTime)
    is_project_account  = Column("Is_Project_Account", Boolean, nullable=False, default=False)
    salesman_id         = Column("Salesman_id", Integer)
