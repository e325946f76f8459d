"""Demo rows served by the mock provider."""

DEMO_LOTS = (
    {
        "id": "demo-a",
        "name": "Demo Lot A",
        "free": 10,
        "total": 50,
        "status": "OPEN",
    },
    {
        "id": "demo-b",
        "name": "Demo Lot B",
        "free": 0,
        "total": 30,
        "status": "FULL",
    },
    {
        "id": "p1",
        "name": "City Hall Garage",
        "address": "110 Laurier Ave W",
        "capacity": 420,
        "virtual_occupied": 310,
        "lat": 45.4208,
        "lng": -75.6963,
    },
    {
        "id": "p2",
        "name": "Rideau Centre",
        "address": "50 Rideau St",
        "capacity": 900,
        "lat": 45.4258,
        "lng": -75.6918,
    },
    {
        "id": "p3",
        "name": "ByWard Market",
        "address": "55 ByWard Market Sq",
        "capacity": 160,
        "lat": 45.4284,
        "lng": -75.6918,
    },
    {
        "id": "p4",
        "name": "Ottawa U - Lees",
        "address": "200 Lees Ave",
        "capacity": 260,
        "virtual_occupied": 245,
        "lat": 45.4165,
        "lng": -75.6704,
    },
    {
        "id": "p5",
        "name": "Tunney's Pasture Station Park and Ride",
        "capacity": 340,
        "lat": 45.4036,
        "lng": -75.7353,
    },
    {
        "id": "p6",
        "name": "Civic Hospital Visitor Parking",
        "capacity": 600,
        "lat": 45.3923,
        "lng": -75.7215,
    },
)
