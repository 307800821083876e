# services/sample_data.py

"""
Seed records for the data sets that are not backed by Supabase tables
yet: maintenance requests, showings and financial records.

User ids "3" (tenant) and "4" (maintenance) match the demo accounts.
"""

SAMPLE_MAINTENANCE_REQUESTS = [
    {
        "id": "maint1",
        "property_id": "prop1",
        "unit_number": "101",
        "title": "Leaking Faucet",
        "description": "The bathroom sink faucet is leaking continuously.",
        "status": "pending",
        "priority": "medium",
        "created_at": "2023-04-05T10:30:00Z",
        "created_by": "3",
        "comments": [
            {
                "id": "comment1",
                "text": "I'll check it tomorrow morning.",
                "created_at": "2023-04-05T14:20:00Z",
                "created_by": "4",
            },
        ],
    },
    {
        "id": "maint2",
        "property_id": "prop2",
        "unit_number": "205",
        "title": "Air Conditioning Not Working",
        "description": "The AC unit is not cooling properly. It makes a buzzing noise but doesn't cool.",
        "status": "in_progress",
        "priority": "high",
        "created_at": "2023-04-03T09:15:00Z",
        "created_by": "3",
        "assigned_to": "4",
    },
    {
        "id": "maint3",
        "property_id": "prop1",
        "unit_number": "108",
        "title": "Broken Window",
        "description": "The window in the bedroom is cracked and needs replacement.",
        "status": "completed",
        "priority": "medium",
        "created_at": "2023-03-28T16:45:00Z",
        "created_by": "3",
        "assigned_to": "4",
        "comments": [
            {
                "id": "comment2",
                "text": "Ordered replacement glass, will install when it arrives.",
                "created_at": "2023-03-29T10:20:00Z",
                "created_by": "4",
            },
            {
                "id": "comment3",
                "text": "Window has been replaced and sealed.",
                "created_at": "2023-04-02T13:40:00Z",
                "created_by": "4",
            },
        ],
    },
]

SAMPLE_SHOWINGS = [
    {
        "id": "show1",
        "property_id": "prop1",
        "unit_number": "103",
        "date": "2023-04-12",
        "time": "10:00",
        "prospect_name": "Alex Johnson",
        "prospect_email": "alex@example.com",
        "prospect_phone": "555-123-4567",
        "status": "scheduled",
    },
    {
        "id": "show2",
        "property_id": "prop3",
        "unit_number": "302",
        "date": "2023-04-13",
        "time": "15:30",
        "prospect_name": "Taylor Smith",
        "prospect_email": "taylor@example.com",
        "prospect_phone": "555-987-6543",
        "status": "scheduled",
    },
    {
        "id": "show3",
        "property_id": "prop2",
        "unit_number": "210",
        "date": "2023-04-10",
        "time": "12:00",
        "prospect_name": "Jordan Lee",
        "prospect_email": "jordan@example.com",
        "prospect_phone": "555-456-7890",
        "status": "completed",
    },
]

SAMPLE_FINANCIAL_RECORDS = [
    {"id": "fin1", "property_id": "prop1", "type": "income", "category": "Rent",
     "amount": 12000, "date": "2023-04-01", "description": "Monthly rent collection"},
    {"id": "fin2", "property_id": "prop1", "type": "expense", "category": "Maintenance",
     "amount": 2500, "date": "2023-04-03", "description": "Plumbing repairs"},
    {"id": "fin3", "property_id": "prop2", "type": "income", "category": "Rent",
     "amount": 15500, "date": "2023-04-01", "description": "Monthly rent collection"},
    {"id": "fin4", "property_id": "prop2", "type": "expense", "category": "Utilities",
     "amount": 1800, "date": "2023-04-05", "description": "Water and electricity"},
    {"id": "fin5", "property_id": "prop3", "type": "income", "category": "Rent",
     "amount": 9000, "date": "2023-04-01", "description": "Monthly rent collection"},
    {"id": "fin6", "property_id": "prop3", "type": "expense", "category": "Taxes",
     "amount": 3200, "date": "2023-04-10", "description": "Property taxes"},
]
