"""Sample scheme catalog used to seed the in-memory store.

Central schemes only (state=None). Real deployments seed the catalog
through the SQL store instead.
"""

from __future__ import annotations

from schemematch.schemas.eligibility import SchemeCreate

ALL_CATEGORIES = ["General", "OBC", "SC", "ST"]

SAMPLE_SCHEMES: list[SchemeCreate] = [
    SchemeCreate(
        name="PM Kisan Samman Nidhi",
        description="Direct financial assistance of ₹6,000 per year to small and marginal farmers",
        category="Agriculture",
        ministry="Ministry of Agriculture and Farmers Welfare",
        eligibility_criteria={
            "landHolding": "Up to 2 hectares",
            "farmerType": "Small and marginal farmers",
            "citizenship": "Indian citizen",
        },
        benefits="₹6,000 per year in three equal installments of ₹2,000 each",
        application_process="Apply online through PM Kisan portal with land records",
        documents=["Aadhaar Card", "Bank Account Details", "Land Records"],
        application_url="https://pmkisan.gov.in/",
        max_income=200000,
        min_age=18,
        target_categories=ALL_CATEGORIES,
        target_occupations=["Farmer"],
    ),
    SchemeCreate(
        name="Ayushman Bharat Pradhan Mantri Jan Arogya Yojana",
        description="Health insurance scheme providing coverage up to ₹5 lakh per family per year",
        category="Healthcare",
        ministry="Ministry of Health and Family Welfare",
        eligibility_criteria={
            "economicStatus": "Below poverty line or as per SECC database",
            "familyIncome": "Annual family income below ₹5 lakh",
        },
        benefits="Free treatment up to ₹5 lakh per family per year at empaneled hospitals",
        application_process="Automatic enrollment based on SECC database or apply at Common Service Centers",
        documents=["Aadhaar Card", "Income Certificate", "SECC verification"],
        application_url="https://pmjay.gov.in/",
        max_income=500000,
        target_categories=ALL_CATEGORIES,
    ),
    SchemeCreate(
        name="Pradhan Mantri Awas Yojana (Urban)",
        description="Affordable housing scheme for urban poor with financial assistance for house construction",
        category="Housing",
        ministry="Ministry of Housing and Urban Affairs",
        eligibility_criteria={
            "housing": "Should not own a pucca house",
            "income": "Annual household income as per category",
            "urban": "Must be urban resident",
        },
        benefits="Financial assistance ranging from ₹1.5 lakh to ₹2.67 lakh",
        application_process="Apply online through official PMAY portal with required documents",
        documents=["Aadhaar Card", "Income Certificate", "Property Documents", "Bank Account Details"],
        application_url="https://pmaymis.gov.in/",
        max_income=1800000,
        min_age=18,
        target_categories=ALL_CATEGORIES,
    ),
    SchemeCreate(
        name="Pradhan Mantri Jan Dhan Yojana",
        description=(
            "National Mission for Financial Inclusion to ensure access to banking, remittance, "
            "credit, insurance and pension services in an affordable manner"
        ),
        category="Financial Inclusion",
        ministry="Ministry of Finance",
        eligibility_criteria={"minAge": 10},
        benefits="Zero-balance account, RuPay debit card, accident insurance cover of ₹1 lakh",
        application_process="Open an account at any bank branch or Business Correspondent outlet",
        documents=["Aadhaar Card", "PAN Card"],
        application_url="https://www.pmjdy.gov.in/",
        min_age=10,
    ),
    SchemeCreate(
        name="National Scholarship Portal",
        description="Single window for central and state scholarships for students",
        category="Education",
        ministry="Ministry of Electronics and Information Technology",
        eligibility_criteria={"academicMerit": True, "incomeCriteria": True},
        benefits="Financial assistance for education",
        application_process="Apply online through the National Scholarship Portal",
        documents=["Aadhaar Card", "Income Certificate", "Academic Certificates"],
        application_url="https://scholarships.gov.in/",
        max_income=250000,
    ),
    SchemeCreate(
        name="Indira Gandhi National Disability Pension Scheme",
        description="Monthly pension for persons with severe or multiple disability living below the poverty line",
        category="Disability",
        ministry="Ministry of Rural Development",
        eligibility_criteria={"disability": "80% or more", "economicStatus": "Below poverty line"},
        benefits="Monthly pension of ₹300, ₹500 after the age of 80",
        application_process="Apply through the Gram Panchayat or municipal office with a disability certificate",
        documents=["Aadhaar Card", "Disability Certificate", "BPL Card"],
        application_url="https://nsap.nic.in/",
        max_income=100000,
        min_age=18,
        max_age=79,
    ),
]
