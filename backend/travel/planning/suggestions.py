"""Destination suggestion catalog - static activity seeds per city.

Seeds are identified by a stable hash of city and title rather than by list
position, so reordering the catalog does not change which seeds count as
already added to a trip.
"""

import hashlib
import unicodedata
from collections.abc import Iterable

from pydantic import BaseModel

from backend.travel.models.common import CostCategory, TimeSlot
from backend.travel.models.trip import TripActivity

_SEED_FIELDS = (
    "title",
    "description",
    "time_slot",
    "location_name",
    "estimated_cost",
    "cost_category",
    "duration_minutes",
)

_M, _A, _E = TimeSlot.morning, TimeSlot.afternoon, TimeSlot.evening
_FOOD, _ACT, _TRN, _SHOP = (
    CostCategory.food,
    CostCategory.activity,
    CostCategory.transport,
    CostCategory.shopping,
)

CITY_DATA: dict[str, list[tuple]] = {
    "barcelona": [
        ("La Sagrada Familia", "Gaudí's iconic basilica. Book tickets in advance to skip the line", _M, "Carrer de Mallorca, 401", 26, _ACT, 90),
        ("La Boqueria Market", "Wander through the famous food market and grab fresh juice and tapas", _M, "La Rambla, 91", 15, _FOOD, 60),
        ("Park Güell", "Gaudí's colorful mosaic park with panoramic city views", _A, "Carrer d'Olot", 10, _ACT, 120),
        ("Gothic Quarter Walk", "Get lost in the narrow medieval streets of Barri Gòtic", _A, "Barri Gòtic", 0, _ACT, 90),
        ("Barceloneta Beach", "Relax at the city beach or grab seafood at a chiringuito", _A, "Platja de la Barceloneta", 0, _ACT, 120),
        ("Tapas at El Xampanyet", "Traditional cava bar with some of the best tapas in Born", _E, "Carrer de Montcada, 22", 25, _FOOD, 90),
        ("Bunkers del Carmel", "Best sunset viewpoint in Barcelona. Bring drinks and snacks", _E, "Turó de la Rovira", 5, _ACT, 60),
        ("Casa Batlló Night Visit", "Gaudí's masterpiece lit up at night with a rooftop experience", _E, "Passeig de Gràcia, 43", 39, _ACT, 75),
    ],
    "paris": [
        ("Eiffel Tower", "Take the stairs to the second floor for the best views and less waiting", _M, "Champ de Mars", 29, _ACT, 120),
        ("Croissant at Du Pain et des Idées", "Try the pain des amis and escargot pastry", _M, "34 Rue Yves Toudic", 8, _FOOD, 30),
        ("Louvre Museum", "Focus on one wing to avoid burnout. Denon wing has the Mona Lisa", _A, "Rue de Rivoli", 22, _ACT, 180),
        ("Le Marais Walk", "Trendy neighborhood with vintage shops, falafel, and hidden courtyards", _A, "Le Marais", 0, _ACT, 90),
        ("Seine River Walk", "Walk along the Left Bank from Notre-Dame to Musée d'Orsay", _A, "Quai de la Tournelle", 0, _ACT, 60),
        ("Dinner at Le Bouillon Chartier", "Classic Parisian brasserie with incredible prices. Expect a queue", _E, "7 Rue du Faubourg Montmartre", 18, _FOOD, 75),
        ("Montmartre & Sacré-Cœur", "Climb to the basilica for sunset views, then explore the artists' quarter", _E, "Montmartre", 0, _ACT, 90),
        ("Jazz at Le Caveau de la Huchette", "Legendary jazz club in a medieval cellar with live music every night", _E, "5 Rue de la Huchette", 15, _ACT, 120),
    ],
    "rome": [
        ("Colosseum & Roman Forum", "Book the combined ticket and arrive early for fewer crowds", _M, "Piazza del Colosseo", 18, _ACT, 150),
        ("Coffee at Sant'Eustachio", "Order the gran caffè and drink it at the bar", _M, "Piazza di Sant'Eustachio, 82", 3, _FOOD, 20),
        ("Trastevere Lunch", "Cross the river for authentic Roman cuisine in this charming neighborhood", _A, "Trastevere", 15, _FOOD, 75),
        ("Vatican Museums & Sistine Chapel", "Book skip-the-line tickets. Wednesdays are quieter", _A, "Viale Vaticano", 20, _ACT, 180),
        ("Trevi Fountain", "Throw a coin and make a wish. Visit at dawn for photos without crowds", _A, "Piazza di Trevi", 0, _ACT, 30),
        ("Aperitivo at Salotto 42", "Stylish cocktail bar near the Pantheon with generous aperitivo buffet", _E, "Piazza di Pietra, 42", 12, _FOOD, 60),
        ("Piazza Navona at Night", "Stroll through the baroque square with Bernini's fountains lit up", _E, "Piazza Navona", 0, _ACT, 45),
        ("Gelato at Giolitti", "Rome's oldest gelateria. Try the pistachio and crema", _E, "Via degli Uffici del Vicario, 40", 4, _FOOD, 20),
    ],
    "amsterdam": [
        ("Anne Frank House", "Book tickets exactly 6 weeks in advance, they sell out fast", _M, "Prinsengracht 263-267", 16, _ACT, 75),
        ("Canal Bike Ride", "Rent a bike and ride along the Herengracht and Keizersgracht canals", _M, "Central Amsterdam", 12, _TRN, 90),
        ("Rijksmuseum", "See Rembrandt's Night Watch and Vermeer's Milkmaid", _A, "Museumstraat 1", 22, _ACT, 150),
        ("Jordaan Neighborhood", "Boutique shops, cozy cafés, and the best apple pie at Winkel 43", _A, "Jordaan", 8, _FOOD, 90),
        ("Vondelpark", "Amsterdam's green heart. Grab a coffee and people-watch", _A, "Vondelpark", 0, _ACT, 60),
        ("Indonesian Rijsttafel", "Colonial-era multi-dish feast at Kantjil & de Tijger", _E, "Spuistraat 291-293", 28, _FOOD, 90),
        ("Canal Cruise at Sunset", "Open-boat canal tour through the UNESCO heritage canals", _E, "Stadhouderskade", 18, _ACT, 75),
        ("Paradiso Live Music", "Legendary concert venue in a former church", _E, "Weteringschans 6-8", 20, _ACT, 120),
    ],
    "london": [
        ("British Museum", "Free entry. See the Rosetta Stone and Parthenon sculptures", _M, "Great Russell Street", 0, _ACT, 150),
        ("Full English at The Regency Café", "Iconic greasy spoon with classic British breakfast, cash only", _M, "17-19 Regency Street", 10, _FOOD, 45),
        ("Tower of London", "See the Crown Jewels and join a Yeoman Warder tour", _A, "Tower Hill", 33, _ACT, 150),
        ("Borough Market", "London's best food market. Try the grilled cheese at Kappacasein", _A, "8 Southwark Street", 15, _FOOD, 75),
        ("South Bank Walk", "Walk from Tate Modern to the London Eye along the Thames", _A, "South Bank", 0, _ACT, 60),
        ("Pub Dinner at The Churchill Arms", "Flower-covered pub in Kensington with Thai food upstairs", _E, "119 Kensington Church Street", 14, _FOOD, 75),
        ("West End Show", "Grab last-minute tickets at the TKTS booth in Leicester Square", _E, "Leicester Square", 35, _ACT, 150),
        ("Sky Garden", "Free rooftop garden with panoramic views. Book the free slot online", _E, "20 Fenchurch Street", 0, _ACT, 60),
    ],
    "tokyo": [
        ("Tsukiji Outer Market", "Fresh sushi breakfast and street food, try tamagoyaki on a stick", _M, "Tsukiji 4-chome", 15, _FOOD, 90),
        ("Senso-ji Temple", "Tokyo's oldest temple. Walk through the Kaminarimon gate at dawn", _M, "2-3-1 Asakusa", 0, _ACT, 60),
        ("Shibuya Crossing", "World's busiest intersection, watch from the Starbucks above", _A, "Shibuya", 5, _ACT, 30),
        ("Meiji Shrine", "Peaceful forested shrine in the heart of Harajuku", _A, "1-1 Yoyogikamizonocho", 0, _ACT, 60),
        ("Harajuku & Takeshita Street", "Youth culture, crepes, and wild fashion", _A, "Takeshita Street", 10, _SHOP, 90),
        ("Ramen at Fuunji", "Legendary tsukemen spot. Expect a short queue", _E, "Yoyogi, Shibuya", 10, _FOOD, 45),
        ("Golden Gai", "Tiny 6-seat bars packed into narrow alleys", _E, "Shinjuku Golden Gai", 15, _FOOD, 90),
        ("Tokyo Tower at Night", "Classic landmark lit up, quieter than Skytree with great views", _E, "4-2-8 Shibakoen", 12, _ACT, 60),
    ],
    "istanbul": [
        ("Hagia Sophia", "Byzantine-Ottoman landmark. Arrive at opening for smaller crowds", _M, "Sultan Ahmet, Ayasofya Meydanı", 25, _ACT, 90),
        ("Turkish Breakfast at Van Kahvaltı Evi", "Massive spread with honey, cheese, eggs, and endless çay", _M, "Kılıçali Paşa, Defterdar Ykş. 52", 12, _FOOD, 75),
        ("Grand Bazaar", "One of the world's oldest covered markets. Haggle for ceramics and lamps", _A, "Beyazıt, Kalpakçılar Cd.", 0, _SHOP, 120),
        ("Bosphorus Ferry", "Public ferry from Eminönü, the cheapest way to cruise the strait", _A, "Eminönü Ferry Terminal", 3, _TRN, 90),
        ("Spice Bazaar", "Aromatic market with Turkish delight, spices, and dried fruits", _A, "Rüstem Paşa, Erzak Ambarı Sok.", 10, _SHOP, 45),
        ("Rooftop Dinner in Sultanahmet", "Kebabs with views of the Blue Mosque lit up at night", _E, "Sultanahmet", 20, _FOOD, 90),
        ("Hammam at Kılıç Ali Paşa", "Restored 16th century bathhouse. Book the traditional scrub", _E, "Kemankeş Karamustafa Paşa", 50, _ACT, 90),
        ("İstiklal Avenue & Galata Tower", "Walk the pedestrian street and climb the medieval tower", _E, "Beyoğlu", 10, _ACT, 75),
    ],
    "lisbon": [
        ("Pastéis de Belém", "The original custard tart bakery since 1837. Order extra cinnamon", _M, "Rua de Belém 84-92", 5, _FOOD, 30),
        ("Tram 28 to Alfama", "Iconic yellow tram through the oldest neighborhood", _M, "Largo Martim Moniz", 3, _TRN, 45),
        ("Castelo de São Jorge", "Moorish castle with the best panoramic views of Lisbon", _A, "Rua de Santa Cruz do Castelo", 15, _ACT, 90),
        ("Time Out Market", "Food hall with the city's best chefs under one roof", _A, "Av. 24 de Julho 49", 18, _FOOD, 75),
        ("LX Factory", "Creative hub in a former industrial complex: bookshop, street art, brunch", _A, "Rua Rodrigues de Faria 103", 0, _ACT, 90),
        ("Sunset at Miradouro da Graça", "Locals' favorite viewpoint. Grab a beer from the kiosk", _E, "Largo da Graça", 4, _FOOD, 60),
        ("Fado in Alfama", "Traditional Portuguese soul music in an intimate tasca", _E, "Alfama", 25, _ACT, 90),
        ("Ginjinha Shot at A Ginjinha", "Tiny bar serving cherry liqueur since 1840", _E, "Largo de São Domingos 8", 2, _FOOD, 15),
    ],
}


class SuggestionSeed(BaseModel):
    """Candidate activity offered for a destination."""

    suggestion_id: str
    title: str
    description: str
    time_slot: TimeSlot
    location_name: str
    estimated_cost: float
    cost_category: CostCategory
    duration_minutes: int

    def to_activity(self) -> TripActivity:
        # Catalog seeds carry no coordinates
        return TripActivity(
            title=self.title,
            description=self.description,
            time_slot=self.time_slot,
            location_name=self.location_name,
            latitude=0.0,
            longitude=0.0,
            estimated_cost=float(self.estimated_cost),
            cost_category=self.cost_category,
            duration_minutes=self.duration_minutes,
            suggestion_id=self.suggestion_id,
        )


class OfferedSuggestion(SuggestionSeed):
    """Seed annotated with whether the trip already contains it."""

    added: bool = False


def normalize_destination(destination: str) -> str:
    """Lowercase, strip accents and anything that is not a letter or space."""
    decomposed = unicodedata.normalize("NFD", destination.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return "".join(ch for ch in stripped if "a" <= ch <= "z" or ch == " ").strip()


def suggestion_id(city: str, title: str) -> str:
    """Stable identifier for a seed."""
    digest = hashlib.sha256(f"{city}|{normalize_destination(title)}".encode()).hexdigest()
    return f"sug_{digest[:16]}"


# Shorter fragments would match most cities ("a", "ro").
MIN_PARTIAL_MATCH = 3


def match_city(destination: str) -> str | None:
    normalized = normalize_destination(destination)
    if not normalized:
        return None
    for city in CITY_DATA:
        if city in normalized:
            return city
        if len(normalized) >= MIN_PARTIAL_MATCH and normalized in city:
            return city
    return None


def suggestions_for(destination: str) -> list[SuggestionSeed]:
    """Catalog seeds for a destination; unmatched destinations yield []."""
    city = match_city(destination)
    if city is None:
        return []
    return [
        SuggestionSeed(suggestion_id=suggestion_id(city, row[0]), **dict(zip(_SEED_FIELDS, row)))
        for row in CITY_DATA[city]
    ]


def find_suggestion(sid: str) -> SuggestionSeed | None:
    """Look a seed up by id across every city of the catalog."""
    for city in CITY_DATA:
        for seed in suggestions_for(city):
            if seed.suggestion_id == sid:
                return seed
    return None


def offer(seeds: Iterable[SuggestionSeed], added_ids: set[str]) -> list[OfferedSuggestion]:
    """Mark seeds the trip already contains."""
    return [
        OfferedSuggestion(**seed.model_dump(), added=seed.suggestion_id in added_ids)
        for seed in seeds
    ]


def supported_cities() -> list[str]:
    return [city.capitalize() for city in CITY_DATA]
